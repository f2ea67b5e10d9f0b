from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_records_for_period(self, employee_id, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        """All records whose local date may fall inside [start, end].

        Implementations may return extra rows near the bounds; the engine
        filters on the employer-local date.
        """

        raise NotImplementedError
