from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from payroll_hours.attendance.model import Adjustment, AttendanceRecord, Session
from payroll_hours.core.enums import AdjustmentStatus, OvertimePolicy
from payroll_hours.core.exceptions import ConfigurationError, ValidationError
from payroll_hours.payroll.engine import PayslipEngine
from payroll_hours.payroll.model import CompensationProfile, Deduction, HoursResult, PayPeriod, PayPolicy

JANUARY = PayPeriod(date(2026, 1, 1), date(2026, 1, 31))


def _hours(actual: float) -> HoursResult:
    return HoursResult(employee_id="EMP-1", period=JANUARY, days=(), actual_hours_worked=actual)


def _profile(salary: str) -> CompensationProfile:
    return CompensationProfile(employee_id="EMP-1", basic_salary=Decimal(salary))


def test_pay_is_prorated_by_hours_worked():
    slip = PayslipEngine().price(_profile("1760"), _hours(16.0))

    assert slip.hourly_rate == Decimal("10.0000")
    assert slip.paid_hours == 16.0
    assert slip.hours_not_worked == 160.0
    assert slip.gross_pay == Decimal("160.00")
    assert slip.ssnit_employee == Decimal("8.80")
    assert slip.paye == Decimal("0.00")
    assert slip.total_deductions == Decimal("8.80")
    assert slip.net_pay == Decimal("151.20")


def test_full_month_with_paye_and_employer_contributions():
    slip = PayslipEngine().price(_profile("8800"), _hours(176.0))

    assert slip.gross_pay == Decimal("8800.00")
    assert slip.ssnit_employee == Decimal("484.00")
    assert slip.paye == Decimal("818.00")
    assert slip.net_pay == Decimal("7498.00")
    assert slip.hours_not_worked == 0
    # Employer side is reported, not deducted.
    assert slip.ssnit_employer == Decimal("1144.00")
    assert slip.ssnit_tier1 == Decimal("202.50")
    assert slip.ssnit_tier2 == Decimal("75.00")


def test_overtime_is_clamped_by_default():
    slip = PayslipEngine().price(_profile("8800"), _hours(180.0))

    assert slip.actual_hours_worked == 180.0
    assert slip.paid_hours == 176.0
    assert slip.hours_not_worked == 0
    assert slip.gross_pay == Decimal("8800.00")


def test_overtime_paid_when_policy_says_so():
    engine = PayslipEngine(PayPolicy(overtime=OvertimePolicy.PAY))

    slip = engine.price(_profile("8800"), _hours(180.0))

    assert slip.paid_hours == 180.0
    assert slip.gross_pay == Decimal("9000.00")
    assert slip.hours_not_worked == 0


def test_actual_hours_are_rounded_to_four_places():
    slip = PayslipEngine().price(_profile("1760"), _hours(6 + 26 / 60 + 30 / 3600))

    assert slip.actual_hours_worked == 6.4417
    assert slip.gross_pay == Decimal("64.42")


def test_other_deductions_reduce_net():
    slip = PayslipEngine().price(_profile("1760"), _hours(16.0), [Deduction("Loan deduction", Decimal("100"))])

    assert slip.other_deductions == (Deduction("Loan deduction", Decimal("100.00")),)
    assert slip.total_deductions == Decimal("108.80")
    assert slip.net_pay == Decimal("51.20")


def test_net_pay_never_negative():
    slip = PayslipEngine().price(_profile("1760"), _hours(16.0), [Deduction("Advance deduction", Decimal("5000"))])

    assert slip.net_pay == Decimal("0.00")
    assert slip.total_deductions == Decimal("5008.80")


def test_negative_deduction_amount_is_rejected():
    with pytest.raises(ValidationError):
        PayslipEngine().price(_profile("1760"), _hours(16.0), [Deduction("Bad", Decimal("-1"))])


@pytest.mark.parametrize("profile", [None, _profile("0"), _profile("-5")])
def test_missing_or_unusable_salary_is_a_configuration_error(profile):
    with pytest.raises(ConfigurationError):
        PayslipEngine().price(profile, _hours(16.0))


def test_zero_expected_hours_is_a_configuration_error():
    engine = PayslipEngine(PayPolicy(expected_monthly_hours=Decimal("0")))

    with pytest.raises(ConfigurationError):
        engine.price(_profile("1760"), _hours(16.0))


def test_compute_checks_profile_before_reading_records():
    class Exploding:
        def __iter__(self):
            raise AssertionError("records should not be read")

    with pytest.raises(ConfigurationError):
        PayslipEngine().compute(employee_id="EMP-1", period=JANUARY, profile=None, records=Exploding())


def test_compute_end_to_end_reports_excluded_dates():
    def approved(day):
        return Adjustment(
            status=AdjustmentStatus.APPROVED,
            requested_primary=Session(f"2026-01-{day:02d}T08:00:00Z", f"2026-01-{day:02d}T16:00:00Z"),
            applied=True,
        )

    records = [
        AttendanceRecord(record_id=1, employee_id="EMP-1", work_date="2026-01-02", adjustment=approved(2)),
        AttendanceRecord(
            record_id=2,
            employee_id="EMP-1",
            work_date="2026-01-03",
            primary_session=Session("2026-01-03T08:00:00Z", "2026-01-03T15:26:30Z"),
            adjustment=Adjustment(status=AdjustmentStatus.PENDING),
        ),
        AttendanceRecord(record_id=3, employee_id="EMP-1", work_date="2026-01-04", adjustment=approved(4)),
    ]

    slip = PayslipEngine().compute(employee_id="EMP-1", period=JANUARY, profile=_profile("1760"), records=records)

    assert slip.actual_hours_worked == 16.0
    assert slip.gross_pay == Decimal("160.00")
    assert slip.excluded_dates == ("2026-01-03",)
    assert slip.to_dict()["net_pay"] == 151.2


def test_same_input_gives_equal_payslips():
    engine = PayslipEngine()

    assert engine.price(_profile("9050"), _hours(100.5)) == engine.price(_profile("9050"), _hours(100.5))
