from __future__ import annotations

from typing import Tuple

from ...attendance.strategies.base import ResolvedTime
from ..model import PayPolicy
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: a lone session at or over the threshold loses the unlogged break, not below 0.

    A secondary session or punches already encode the break, so nothing is deducted there.
    """

    def __init__(self, policy: PayPolicy | None = None):
        self._policy = policy or PayPolicy()

    def worked_seconds(self, resolved: ResolvedTime) -> Tuple[float, bool]:
        seconds = max(resolved.seconds, 0.0)
        threshold = float(self._policy.break_threshold_hours) * 3600
        if resolved.unsplit and seconds >= threshold:
            seconds -= float(self._policy.break_minutes_if_unsplit) * 60
            return max(seconds, 0.0), True
        return seconds, False
