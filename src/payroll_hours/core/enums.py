from __future__ import annotations

from enum import Enum
from typing import Optional


class PunchKind(str, Enum):
    """Direction of a raw device punch."""

    IN = "IN"
    OUT = "OUT"

    @classmethod
    def parse(cls, value) -> Optional["PunchKind"]:
        raw = str(value or "").strip().upper()
        if raw in ("IN", "OUT"):
            return cls(raw)
        return None


class AdjustmentStatus(str, Enum):
    """State of an employee-submitted time correction."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, value) -> Optional["AdjustmentStatus"]:
        raw = str(value or "").strip().upper()
        if not raw:
            return None
        if raw == "CANCELED":
            raw = "CANCELLED"
        try:
            return cls(raw)
        except ValueError:
            return None


class TimeSource(str, Enum):
    """Which representation decided the hours for a date."""

    ADJUSTMENT = "adjustment"
    PUNCHES = "punches"
    SESSIONS = "sessions"
    NONE = "none"


class OvertimePolicy(str, Enum):
    """How hours beyond the expected monthly hours are priced."""

    CLAMP = "clamp"
    PAY = "pay"


class ExclusionReason(str, Enum):
    """Why a date's hours were left out of the period total."""

    PENDING_ADJUSTMENT = "pending adjustment"
    CANCELLED_ADJUSTMENT = "cancelled adjustment"
    OUTSIDE_TOLERANCE = "outside tolerance"
