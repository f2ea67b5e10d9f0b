from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple

from ...attendance.strategies.base import ResolvedTime


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_seconds(self, resolved: ResolvedTime) -> Tuple[float, bool]:
        """Payable seconds for one record and whether a break was deducted."""
        raise NotImplementedError
