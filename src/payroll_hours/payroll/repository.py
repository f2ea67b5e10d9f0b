from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import CompensationProfile, Deduction, Payslip


class CompensationRepository(Protocol):
    def get_profile(self, employee_id) -> Optional[CompensationProfile]:
        raise NotImplementedError


class DeductionRepository(Protocol):
    def list_for_period(self, employee_id, *, start: date, end: date) -> Sequence[Deduction]:
        raise NotImplementedError


class PayslipRepository(Protocol):
    def upsert(self, payslip: Payslip) -> None:
        """Insert or overwrite by (employee_id, period_start, period_end); last writer wins."""

        raise NotImplementedError

    def get(self, employee_id, *, start: date, end: date) -> Optional[Payslip]:
        raise NotImplementedError
