from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when hours cannot be priced (missing profile, salary or policy)."""


class DomainWarning(Warning):
    """Base for issues the engine records and keeps going past."""


class DataQualityWarning(DomainWarning):
    """A record (or part of one) was unusable: bad timestamp, malformed punch, negative session."""

    def __init__(self, reason: str, *, record_id=None, date_key: Optional[str] = None, skipped: bool = True):
        super().__init__(reason)
        self.reason = reason
        self.record_id = record_id
        self.date_key = date_key
        self.skipped = skipped

    def to_dict(self) -> dict:
        return {
            "type": "data_quality",
            "record_id": self.record_id,
            "date": self.date_key,
            "reason": self.reason,
            "skipped": self.skipped,
        }


class AmbiguousPeriodWarning(DomainWarning):
    """A date's hours were left out of the total until someone resolves it.

    `reason` is one of the ExclusionReason values (pending / cancelled adjustment,
    raw time outside the tolerance band).
    """

    def __init__(self, date_key: str, hours: float, reason: str):
        super().__init__(f"{date_key}: {reason} ({hours:.2f}h)")
        self.date_key = date_key
        self.hours = hours
        self.reason = reason

    def to_dict(self) -> dict:
        return {
            "type": "ambiguous_period",
            "date": self.date_key,
            "hours": round(self.hours, 4),
            "reason": self.reason,
        }
