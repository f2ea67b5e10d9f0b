from __future__ import annotations

from dataclasses import dataclass

from .normalizer import ParsedRecord
from .strategies.adjustment_strategy import AdjustmentStrategy
from .strategies.base import TimeSourceStrategy
from .strategies.punches_strategy import PunchesStrategy
from .strategies.sessions_strategy import SessionsStrategy


@dataclass
class TimeSourceFactory:
    """Factory Pattern: choose which representation of a record is authoritative."""

    def for_record(self, record: ParsedRecord) -> TimeSourceStrategy:
        adj = record.adjustment
        if adj is not None and adj.is_authoritative:
            return AdjustmentStrategy()
        if record.punches:
            return PunchesStrategy()
        return SessionsStrategy()
