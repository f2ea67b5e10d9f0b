from __future__ import annotations

from ...core.enums import TimeSource
from ..normalizer import ParsedRecord
from .base import ResolvedTime, TimeSourceStrategy, sum_sessions


class AdjustmentStrategy(TimeSourceStrategy):
    """Approved and applied adjustment: both requested sessions, taken as entered."""

    def resolve(self, record: ParsedRecord) -> ResolvedTime:
        seconds, negative = sum_sessions((record.requested_primary, record.requested_secondary))
        return ResolvedTime(source=TimeSource.ADJUSTMENT, seconds=seconds, negative_sessions=negative)
