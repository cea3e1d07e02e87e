from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...attendance.model import AttendanceRecord
from ..model import WorkedTime


class WorkedTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked-time rules)."""

    @abstractmethod
    def summarize(self, records: Sequence[AttendanceRecord]) -> WorkedTime:
        """Fold one employee's records for one day, given in timestamp order."""

        raise NotImplementedError
