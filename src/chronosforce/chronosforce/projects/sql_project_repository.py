from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from sqlalchemy import select, update

from ..core.enums import ProjectStatus, ProjectType
from ..database.connection import DatabaseConnection
from ..database.schema import projects
from ..database.sql_base import db_transaction, fetchall, fetchone
from .model import Project
from .repository import ProjectRepository


class SqlProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, project_id: str) -> Optional[Project]:
        with db_transaction(self._conn_factory) as conn:
            row = fetchone(conn.execute(select(projects).where(projects.c.project_id == project_id)))
            return _to_project(row) if row else None

    def list_all(self) -> Sequence[Project]:
        with db_transaction(self._conn_factory) as conn:
            rows = fetchall(conn.execute(select(projects).order_by(projects.c.project_id)))
            return [_to_project(r) for r in rows]

    def save(self, project: Project) -> None:
        values = {
            "name": project.name,
            "client": project.client,
            "type": project.type.value,
            "status": project.status.value,
            "director_id": project.director_id,
            "team_lead_id": project.team_lead_id,
            "start_date": project.start_date,
            "end_date": project.end_date,
        }
        with db_transaction(self._conn_factory) as conn:
            updated = conn.execute(update(projects).where(projects.c.project_id == project.project_id).values(**values))
            if updated.rowcount == 0:
                conn.execute(projects.insert().values(project_id=project.project_id, **values))


def _to_project(r: Dict[str, Any]) -> Project:
    return Project(
        project_id=r["project_id"],
        name=r["name"],
        client=r.get("client") or "",
        type=ProjectType(r["type"]),
        status=ProjectStatus(r["status"]),
        director_id=r.get("director_id"),
        team_lead_id=r.get("team_lead_id"),
        start_date=r.get("start_date"),
        end_date=r.get("end_date"),
    )
