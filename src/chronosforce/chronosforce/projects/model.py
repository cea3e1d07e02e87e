from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ProjectStatus, ProjectType


@dataclass(frozen=True)
class Project:
    """Domain entity: Project (read-only for the attendance engine)."""

    project_id: str
    name: str
    client: str = ""
    type: ProjectType = ProjectType.PERMANENT
    status: ProjectStatus = ProjectStatus.ACTIVE
    director_id: Optional[str] = None
    team_lead_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def is_open(self) -> bool:
        return self.status == ProjectStatus.ACTIVE
