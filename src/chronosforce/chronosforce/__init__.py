"""ChronosForce package.

Workforce attendance and leave approval, organized by feature modules
(employees, attendance, leaves, reports, ...) with a thin Flask controller
layer over the service/repository layers.
"""
