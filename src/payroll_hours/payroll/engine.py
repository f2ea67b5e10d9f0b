"""Hours & pay computation.

`HoursEngine` turns one employee's attendance records into per-date hours for
a pay period; `PayslipEngine` prices those hours. Both are pure: they read an
in-memory snapshot, never touch storage and keep no state between calls, so
the same input always yields an equal result.

Per date the pipeline is:

1. bucket records by employer-local ``YYYY-MM-DD``;
2. drop duplicate records (same punches array or same session pair);
3. pick the authoritative time: approved+applied adjustment, else punches,
   else the primary/secondary sessions;
4. deduct the unlogged break from a lone long session;
5. count a date only when an approved adjustment settles it, or when its raw
   time is within the tolerance band and no pending or cancelled adjustment
   is outstanding; every other date is left out and reported.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from ..attendance.bucketing import bucket_by_date, deduplicate
from ..attendance.factory import TimeSourceFactory
from ..attendance.model import AttendanceRecord
from ..attendance.normalizer import ParsedRecord, parse_record
from ..common.datetime_utils import load_timezone
from ..common.validators import require_non_negative, require_positive
from ..core.enums import ExclusionReason, OvertimePolicy, TimeSource
from ..core.exceptions import AmbiguousPeriodWarning, ConfigurationError, DataQualityWarning, DomainWarning
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import CompensationProfile, DayHours, Deduction, HoursResult, PayPeriod, PayPolicy, Payslip, StatutoryRates
from .statutory import employer_contributions, money, paye_tax, ssnit_employee

log = logging.getLogger(__name__)

HOURS_PRECISION = 4


class HoursEngine:
    def __init__(
        self,
        policy: Optional[PayPolicy] = None,
        *,
        factory: Optional[TimeSourceFactory] = None,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._policy = policy or PayPolicy()
        self._tz = load_timezone(self._policy.timezone)
        self._factory = factory or TimeSourceFactory()
        self._calculator = calculator or StandardPayrollCalculator(self._policy)

    @property
    def policy(self) -> PayPolicy:
        return self._policy

    def compute(self, employee_id, period: PayPeriod, records: Iterable[AttendanceRecord]) -> HoursResult:
        warnings: List[DomainWarning] = []
        parsed: List[ParsedRecord] = []
        skipped = 0

        for rec in records:
            try:
                p = parse_record(rec, self._tz)
            except (ValueError, TypeError) as exc:
                skipped += 1
                warning = DataQualityWarning(str(exc), record_id=rec.record_id)
                warnings.append(warning)
                log.warning("employee=%s record=%s skipped: %s", employee_id, rec.record_id, exc)
                continue
            if period.contains_key(p.date_key):
                parsed.append(p)

        days: List[DayHours] = []
        excluded: List[str] = []
        total = 0.0

        buckets = bucket_by_date(parsed)
        for date_key in sorted(buckets):
            day, day_warnings = self._resolve_day(date_key, buckets[date_key])
            warnings.extend(day_warnings)
            days.append(day)
            if day.counted:
                total += day.hours
            else:
                excluded.append(date_key)
                warnings.append(AmbiguousPeriodWarning(date_key, day.hours, day.exclusion.value))
                log.warning(
                    "employee=%s date=%s excluded: %s (%.2fh)", employee_id, date_key, day.exclusion.value, day.hours
                )

        return HoursResult(
            employee_id=employee_id,
            period=period,
            days=tuple(days),
            actual_hours_worked=max(total, 0.0),
            excluded_dates=tuple(excluded),
            skipped_records=skipped,
            warnings=tuple(warnings),
        )

    def _resolve_day(self, date_key: str, bucket: Sequence[ParsedRecord]) -> Tuple[DayHours, List[DomainWarning]]:
        warnings: List[DomainWarning] = []

        approved = [r for r in bucket if r.adjustment is not None and r.adjustment.is_authoritative]
        if approved:
            if len(approved) > 1:
                log.debug("%s: %d approved adjustments, using record %s", date_key, len(approved), approved[0].record_id)
            candidates = approved[:1]
            pending = cancelled = False
        else:
            candidates, dropped = deduplicate(bucket)
            if dropped:
                log.debug("%s: %d duplicate record(s) discarded", date_key, dropped)
            pending = any(r.adjustment is not None and r.adjustment.is_pending for r in bucket)
            cancelled = any(r.adjustment is not None and r.adjustment.is_cancelled for r in bucket)

        seconds = 0.0
        break_deducted = False
        sources = set()
        for rec in candidates:
            resolved = self._factory.for_record(rec).resolve(rec)
            if resolved.negative_sessions:
                warnings.append(
                    DataQualityWarning(
                        f"{resolved.negative_sessions} session(s) end before they start",
                        record_id=rec.record_id,
                        date_key=date_key,
                        skipped=False,
                    )
                )
            secs, deducted = self._calculator.worked_seconds(resolved)
            seconds += secs
            break_deducted = break_deducted or deducted
            sources.add(resolved.source)

        hours = seconds / 3600.0
        exclusion = None if approved else self._exclusion(hours, pending=pending, cancelled=cancelled)
        return (
            DayHours(
                date_key=date_key,
                source=_main_source(sources),
                hours=hours,
                counted=exclusion is None,
                break_deducted=break_deducted,
                pending=pending,
                exclusion=exclusion,
            ),
            warnings,
        )

    def _exclusion(self, hours: float, *, pending: bool, cancelled: bool) -> Optional[ExclusionReason]:
        """Raw time counts only inside the tolerance band and with no open or cancelled correction."""
        if pending:
            return ExclusionReason.PENDING_ADJUSTMENT
        if cancelled:
            return ExclusionReason.CANCELLED_ADJUSTMENT
        if not self._within_tolerance(hours):
            return ExclusionReason.OUTSIDE_TOLERANCE
        return None

    def _within_tolerance(self, hours: float) -> bool:
        deviation_minutes = abs(hours - float(self._policy.expected_daily_hours)) * 60
        return deviation_minutes <= float(self._policy.tolerance_minutes)


def _main_source(sources) -> TimeSource:
    for s in (TimeSource.ADJUSTMENT, TimeSource.PUNCHES, TimeSource.SESSIONS):
        if s in sources:
            return s
    return TimeSource.NONE


class PayslipEngine:
    """Prices a period's hours into a payslip."""

    def __init__(
        self,
        policy: Optional[PayPolicy] = None,
        rates: Optional[StatutoryRates] = None,
        *,
        hours_engine: Optional[HoursEngine] = None,
    ):
        self._policy = policy or PayPolicy()
        self._rates = rates or StatutoryRates()
        self._hours = hours_engine or HoursEngine(self._policy)

    @property
    def hours_engine(self) -> HoursEngine:
        return self._hours

    def compute(
        self,
        *,
        employee_id,
        period: PayPeriod,
        profile: Optional[CompensationProfile],
        records: Iterable[AttendanceRecord],
        deductions: Iterable[Deduction] = (),
    ) -> Payslip:
        self._check_profile(employee_id, profile)
        hours = self._hours.compute(employee_id, period, records)
        return self.price(profile, hours, deductions)

    def price(
        self,
        profile: Optional[CompensationProfile],
        hours: HoursResult,
        deductions: Iterable[Deduction] = (),
    ) -> Payslip:
        basic, expected = self._check_profile(hours.employee_id, profile)

        actual = round(hours.actual_hours_worked, HOURS_PRECISION)
        expected_f = float(expected)
        paid = actual if self._policy.overtime == OvertimePolicy.PAY else min(actual, expected_f)
        not_worked = round(max(expected_f - actual, 0.0), HOURS_PRECISION)

        hourly_rate = basic / expected
        gross = money(hourly_rate * Decimal(str(paid)))
        ssnit = ssnit_employee(gross, self._rates)
        paye = paye_tax(gross, self._rates)

        others = tuple(
            Deduction(d.description, money(require_non_negative(d.amount, "deduction amount")))
            for d in deductions
        )
        total_deductions = money(ssnit + paye + sum((d.amount for d in others), Decimal("0")))
        net = max(money(gross - total_deductions), Decimal("0.00"))
        employer = employer_contributions(gross, self._rates)

        log.info(
            "payslip employee=%s period=%s..%s hours=%.4f gross=%s net=%s",
            hours.employee_id, hours.period.start, hours.period.end, actual, gross, net,
        )
        return Payslip(
            employee_id=hours.employee_id,
            period_start=hours.period.start,
            period_end=hours.period.end,
            basic_salary=money(basic),
            expected_hours=expected,
            actual_hours_worked=actual,
            paid_hours=paid,
            hours_not_worked=not_worked,
            hourly_rate=hourly_rate.quantize(Decimal("0.0001")),
            gross_pay=gross,
            ssnit_employee=ssnit,
            paye=paye,
            other_deductions=others,
            total_deductions=total_deductions,
            net_pay=net,
            ssnit_employer=employer.ssnit_employer,
            ssnit_tier1=employer.ssnit_tier1,
            ssnit_tier2=employer.ssnit_tier2,
            excluded_dates=hours.excluded_dates,
            skipped_records=hours.skipped_records,
        )

    def _check_profile(self, employee_id, profile: Optional[CompensationProfile]) -> Tuple[Decimal, Decimal]:
        if profile is None:
            raise ConfigurationError(f"No compensation profile for employee {employee_id}")
        basic = require_positive(profile.basic_salary, "basic_salary", error=ConfigurationError)
        expected = require_positive(self._policy.expected_monthly_hours, "expected_monthly_hours", error=ConfigurationError)
        return basic, expected
