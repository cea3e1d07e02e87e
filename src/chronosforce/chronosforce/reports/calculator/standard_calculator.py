from __future__ import annotations

from typing import Optional, Sequence

from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import whole_minutes_between
from ...core.enums import AttendanceEventType
from ..model import WorkedTime
from .base import WorkedTimeCalculator


class StandardWorkedTimeCalculator(WorkedTimeCalculator):
    """Standard rule: sum CLOCK_IN -> CLOCK_OUT spans and BREAK_START -> BREAK_END spans.

    Breaks are reported separately, not subtracted. Unclosed spans count 0.
    """

    def summarize(self, records: Sequence[AttendanceRecord]) -> WorkedTime:
        first_in = None
        last_out = None
        worked = 0
        breaks = 0
        open_in: Optional[AttendanceRecord] = None
        open_break: Optional[AttendanceRecord] = None
        projects: dict[str, None] = {}

        for r in records:
            if r.project_id:
                projects.setdefault(r.project_id, None)

            if r.type == AttendanceEventType.CLOCK_IN:
                first_in = first_in or r.timestamp
                open_in = r
            elif r.type == AttendanceEventType.CLOCK_OUT:
                last_out = r.timestamp
                if open_in is not None:
                    worked += whole_minutes_between(open_in.timestamp, r.timestamp)
                    open_in = None
            elif r.type == AttendanceEventType.BREAK_START:
                open_break = r
            elif r.type == AttendanceEventType.BREAK_END and open_break is not None:
                breaks += whole_minutes_between(open_break.timestamp, r.timestamp)
                open_break = None

        return WorkedTime(
            first_in=first_in,
            last_out=last_out,
            worked_minutes=worked,
            break_minutes=breaks,
            project_ids=tuple(projects),
        )
