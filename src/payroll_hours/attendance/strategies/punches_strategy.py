from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import PunchKind, TimeSource
from ..normalizer import ParsedRecord
from .base import ResolvedTime, TimeSourceStrategy


class PunchesStrategy(TimeSourceStrategy):
    """Pair IN/OUT punches in the order recorded.

    An IN opens a pair (a later IN replaces it), the next OUT closes it.
    Stray OUTs and a trailing IN contribute nothing.
    """

    def resolve(self, record: ParsedRecord) -> ResolvedTime:
        total = 0.0
        negative = 0
        open_in: Optional[datetime] = None

        for p in record.punches:
            if p.kind == PunchKind.IN:
                open_in = p.time
                continue
            if open_in is None:
                continue
            secs = (p.time - open_in).total_seconds()
            if secs < 0:
                negative += 1
            else:
                total += secs
            open_in = None

        return ResolvedTime(source=TimeSource.PUNCHES, seconds=total, negative_sessions=negative)
