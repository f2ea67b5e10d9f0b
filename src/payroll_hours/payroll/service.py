from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from ..attendance.repository import AttendanceRepository
from ..core.exceptions import ConfigurationError
from .cache import PayslipCache
from .engine import PayslipEngine
from .model import HoursResult, PayPeriod, Payslip
from .repository import CompensationRepository, DeductionRepository, PayslipRepository

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class PayslipService:
    """Loads a snapshot from the repositories, runs the engine, caches and stores the result."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        compensation: CompensationRepository,
        *,
        deductions: Optional[DeductionRepository] = None,
        payslips: Optional[PayslipRepository] = None,
        engine: Optional[PayslipEngine] = None,
        cache: Optional[PayslipCache] = None,
    ):
        self._attendance = attendance
        self._compensation = compensation
        self._deductions = deductions
        self._payslips = payslips
        self._engine = engine or PayslipEngine()
        self._cache = cache if cache is not None else PayslipCache()

    def compute_hours(self, employee_id, period: PayPeriod) -> HoursResult:
        records = self._attendance.get_records_for_period(employee_id, start=period.start, end=period.end)
        return self._engine.hours_engine.compute(employee_id, period, records)

    def get_payslip(self, employee_id, period: PayPeriod, *, force_recompute: bool = False) -> Payslip:
        if not force_recompute:
            cached = self._cache.get(employee_id, period.start, period.end)
            if cached is not None:
                log.debug("payslip cache hit employee=%s period=%s..%s", employee_id, period.start, period.end)
                return cached

        profile = self._compensation.get_profile(employee_id)
        if profile is None:
            raise ConfigurationError(f"No compensation profile for employee {employee_id}")

        hours = self.compute_hours(employee_id, period)
        deductions = (
            self._deductions.list_for_period(employee_id, start=period.start, end=period.end)
            if self._deductions
            else ()
        )
        payslip = self._engine.price(profile, hours, deductions)

        self._cache.put(payslip)
        if self._payslips is not None:
            self._payslips.upsert(payslip)
        return payslip

    def invalidate(self, employee_id) -> int:
        """Forget cached payslips, e.g. after an adjustment for this employee was approved."""
        dropped = self._cache.invalidate(employee_id)
        log.info("payslip cache invalidated employee=%s entries=%d", employee_id, dropped)
        return dropped

    def build_statutory_report(self, employee_ids: Iterable, period: PayPeriod) -> ReportData:
        """SSNIT/PAYE rows per employee plus a totals row.

        Employees without a usable salary are left out and listed in the summary.
        """
        rows: list[dict] = []
        missing: list[str] = []
        totals = {k: Decimal("0") for k in ("gross_pay", "ssnit_employee", "ssnit_employer", "ssnit_tier1", "ssnit_tier2", "paye", "net_pay")}

        for employee_id in employee_ids:
            try:
                slip = self.get_payslip(employee_id, period)
            except ConfigurationError as e:
                log.warning("statutory report: employee=%s skipped: %s", employee_id, e)
                missing.append(str(employee_id))
                continue

            row = {
                "employee_id": slip.employee_id,
                "hours_worked": slip.actual_hours_worked,
                "gross_pay": slip.gross_pay,
                "ssnit_employee": slip.ssnit_employee,
                "ssnit_employer": slip.ssnit_employer,
                "ssnit_tier1": slip.ssnit_tier1,
                "ssnit_tier2": slip.ssnit_tier2,
                "paye": slip.paye,
                "net_pay": slip.net_pay,
            }
            rows.append(row)
            for k in totals:
                totals[k] += row[k]

        summary = [dict(totals, employees=len(rows), missing_profiles=missing)]
        return ReportData(rows=rows, summary=summary)
