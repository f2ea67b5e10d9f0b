from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ...core.enums import TimeSource
from ..normalizer import ParsedRecord, ParsedSession


@dataclass(frozen=True)
class ResolvedTime:
    source: TimeSource
    seconds: float
    # Only a lone primary session may carry an unlogged lunch break.
    unsplit: bool = False
    negative_sessions: int = 0


def sum_sessions(sessions: Iterable[Optional[ParsedSession]]) -> Tuple[float, int]:
    """Total seconds of closed sessions; negative ones count as zero.

    Returns (seconds, number of negative sessions).
    """
    total = 0.0
    negative = 0
    for s in sessions:
        if s is None or not s.is_closed:
            continue
        secs = (s.end - s.start).total_seconds()
        if secs < 0:
            negative += 1
            continue
        total += secs
    return total, negative


class TimeSourceStrategy(ABC):
    """Strategy Pattern: encapsulate how one record's worked time is read."""

    @abstractmethod
    def resolve(self, record: ParsedRecord) -> ResolvedTime:
        raise NotImplementedError
