from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional, Tuple

from ..core import constants
from ..core.enums import ExclusionReason, OvertimePolicy, TimeSource
from ..core.exceptions import DomainWarning, ValidationError


@dataclass(frozen=True)
class PayPeriod:
    """Inclusive date range a payslip covers."""

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValidationError("Pay period start must not be after its end")

    def contains_key(self, date_key: str) -> bool:
        # ISO date strings order the same way as the dates they encode.
        return self.start.isoformat() <= date_key <= self.end.isoformat()

    @classmethod
    def calendar_month(cls, year: int, month: int) -> "PayPeriod":
        last = calendar.monthrange(year, month)[1]
        return cls(date(year, month, 1), date(year, month, last))

    @classmethod
    def rolling(cls, pay_date: date, days: int = constants.DEFAULT_ROLLING_PERIOD_DAYS) -> "PayPeriod":
        if days < 1:
            raise ValidationError("Rolling period needs at least one day")
        return cls(pay_date - timedelta(days=days - 1), pay_date)

    @classmethod
    def month_ending(cls, pay_date: date) -> "PayPeriod":
        """From the day after the same day last month up to pay_date."""
        year, month = (pay_date.year, pay_date.month - 1) if pay_date.month > 1 else (pay_date.year - 1, 12)
        day = min(pay_date.day, calendar.monthrange(year, month)[1])
        return cls(date(year, month, day) + timedelta(days=1), pay_date)


@dataclass(frozen=True)
class CompensationProfile:
    employee_id: object
    basic_salary: Decimal


@dataclass(frozen=True)
class PayPolicy:
    """Policy constants for pricing hours. Built from settings, never per call site."""

    expected_monthly_hours: Decimal = Decimal(constants.DEFAULT_EXPECTED_MONTHLY_HOURS)
    expected_daily_hours: float = constants.DEFAULT_EXPECTED_DAILY_HOURS
    tolerance_minutes: float = constants.DEFAULT_TOLERANCE_MINUTES
    break_threshold_hours: float = constants.DEFAULT_BREAK_THRESHOLD_HOURS
    break_minutes_if_unsplit: float = constants.DEFAULT_BREAK_MINUTES
    timezone: str = constants.DEFAULT_TIMEZONE
    overtime: OvertimePolicy = OvertimePolicy.CLAMP


@dataclass(frozen=True)
class StatutoryRates:
    ssnit_employee_rate: Decimal = constants.SSNIT_EMPLOYEE_RATE
    ssnit_employer_rate: Decimal = constants.SSNIT_EMPLOYER_RATE
    ssnit_tier1_rate: Decimal = constants.SSNIT_TIER1_RATE
    ssnit_tier2_rate: Decimal = constants.SSNIT_TIER2_RATE
    ssnit_ceiling: Decimal = constants.SSNIT_CEILING
    paye_brackets: Tuple[Tuple[Optional[Decimal], Decimal], ...] = constants.PAYE_BRACKETS


@dataclass(frozen=True)
class Deduction:
    description: str
    amount: Decimal


@dataclass(frozen=True)
class DayHours:
    date_key: str
    source: TimeSource
    hours: float
    counted: bool
    break_deducted: bool = False
    pending: bool = False
    exclusion: Optional[ExclusionReason] = None

    def to_dict(self) -> dict:
        return {
            "date": self.date_key,
            "source": self.source.value,
            "hours": round(self.hours, 4),
            "counted": self.counted,
            "break_deducted": self.break_deducted,
            "pending": self.pending,
            "excluded_because": self.exclusion.value if self.exclusion else None,
        }


@dataclass(frozen=True)
class HoursResult:
    employee_id: object
    period: PayPeriod
    days: Tuple[DayHours, ...]
    actual_hours_worked: float
    excluded_dates: Tuple[str, ...] = ()
    skipped_records: int = 0
    warnings: Tuple[DomainWarning, ...] = field(default=(), compare=False)

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "period_start": self.period.start.isoformat(),
            "period_end": self.period.end.isoformat(),
            "actual_hours_worked": round(self.actual_hours_worked, 4),
            "days": [d.to_dict() for d in self.days],
            "excluded_dates": list(self.excluded_dates),
            "skipped_records": self.skipped_records,
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass(frozen=True)
class Payslip:
    employee_id: object
    period_start: date
    period_end: date
    basic_salary: Decimal
    expected_hours: Decimal
    actual_hours_worked: float
    paid_hours: float
    hours_not_worked: float
    hourly_rate: Decimal
    gross_pay: Decimal
    ssnit_employee: Decimal
    paye: Decimal
    other_deductions: Tuple[Deduction, ...]
    total_deductions: Decimal
    net_pay: Decimal
    ssnit_employer: Decimal
    ssnit_tier1: Decimal
    ssnit_tier2: Decimal
    excluded_dates: Tuple[str, ...] = ()
    skipped_records: int = 0

    @property
    def key(self) -> tuple:
        return (self.employee_id, self.period_start, self.period_end)

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "basic_salary": float(self.basic_salary),
            "expected_hours": float(self.expected_hours),
            "actual_hours_worked": self.actual_hours_worked,
            "paid_hours": self.paid_hours,
            "hours_not_worked": self.hours_not_worked,
            "hourly_rate": float(self.hourly_rate),
            "gross_pay": float(self.gross_pay),
            "ssnit_employee": float(self.ssnit_employee),
            "paye": float(self.paye),
            "other_deductions": [
                {"description": d.description, "amount": float(d.amount)} for d in self.other_deductions
            ],
            "total_deductions": float(self.total_deductions),
            "net_pay": float(self.net_pay),
            "ssnit_employer": float(self.ssnit_employer),
            "ssnit_tier1": float(self.ssnit_tier1),
            "ssnit_tier2": float(self.ssnit_tier2),
            "excluded_dates": list(self.excluded_dates),
            "skipped_records": self.skipped_records,
        }
