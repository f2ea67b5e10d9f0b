from __future__ import annotations

from ...core.enums import TimeSource
from ..normalizer import ParsedRecord
from .base import ResolvedTime, TimeSourceStrategy, sum_sessions


class SessionsStrategy(TimeSourceStrategy):
    """Primary + secondary clock sessions."""

    def resolve(self, record: ParsedRecord) -> ResolvedTime:
        if record.primary is None and record.secondary is None:
            return ResolvedTime(source=TimeSource.NONE, seconds=0.0)

        seconds, negative = sum_sessions((record.primary, record.secondary))
        return ResolvedTime(
            source=TimeSource.SESSIONS,
            seconds=seconds,
            unsplit=record.primary is not None and record.secondary is None,
            negative_sessions=negative,
        )
