from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta

from ..common.datetime_utils import format_hhmm, parse_hhmm


@dataclass(frozen=True)
class Shift:
    """Daily shift window as wall-clock times in the organisational time zone."""

    start: time
    end: time

    @classmethod
    def from_hhmm(cls, start: str, end: str) -> "Shift":
        return cls(start=parse_hhmm(start), end=parse_hhmm(end))

    def label(self) -> str:
        return f"{format_hhmm(self.start)} - {format_hhmm(self.end)}"

    def has_started(self, wall_clock: time) -> bool:
        return _hhmm(wall_clock) > _hhmm(self.start)

    @property
    def is_overnight(self) -> bool:
        return _hhmm(self.end) <= _hhmm(self.start)

    def end_for(self, clocked_in: datetime) -> datetime:
        """End of the shift occurrence a clock-in belongs to.

        ``clocked_in`` is a local (organisational zone) datetime. An overnight shift
        joined at or after its end time (e.g. 21:45 for 22:00 - 06:00) ends the next
        morning; joined after midnight it ends the same morning.
        """
        end = datetime.combine(clocked_in.date(), self.end.replace(second=0, microsecond=0), tzinfo=clocked_in.tzinfo)
        if self.is_overnight and _hhmm(clocked_in.time()) >= _hhmm(self.end):
            end += timedelta(days=1)
        return end


def _hhmm(value: time) -> tuple[int, int]:
    # Boundaries are compared at minute resolution.
    return value.hour, value.minute
