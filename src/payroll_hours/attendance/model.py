from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple, Union

from ..core.enums import AdjustmentStatus

# Timestamps stay as stored (ISO string or datetime); parsing happens in the engine
# so one malformed value skips a single record instead of failing the read.
RawTimestamp = Union[str, datetime, None]


@dataclass(frozen=True)
class Punch:
    """One raw device punch. `kind` is kept raw ('in'/'OUT'/...) for the same reason."""

    kind: object
    time: RawTimestamp


@dataclass(frozen=True)
class Session:
    """A contiguous clocked-in interval."""

    start: RawTimestamp
    end: RawTimestamp

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None


@dataclass(frozen=True)
class Adjustment:
    """Employee-submitted correction; approval is decided outside this system."""

    status: Optional[AdjustmentStatus]
    requested_primary: Optional[Session] = None
    requested_secondary: Optional[Session] = None
    applied: bool = False

    @property
    def is_authoritative(self) -> bool:
        return self.status == AdjustmentStatus.APPROVED and self.applied

    @property
    def is_pending(self) -> bool:
        return self.status == AdjustmentStatus.PENDING

    @property
    def is_cancelled(self) -> bool:
        return self.status == AdjustmentStatus.CANCELLED


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): one clock log row for one employee on one date."""

    record_id: object
    employee_id: object
    work_date: Union[date, str, None] = None
    primary_session: Optional[Session] = None
    secondary_session: Optional[Session] = None
    punches: Tuple[Punch, ...] = ()
    adjustment: Optional[Adjustment] = None
