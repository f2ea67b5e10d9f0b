"""Build PayPolicy / StatutoryRates from a settings module's plain dicts."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import load_timezone
from ..common.validators import require_non_negative, require_positive
from ..core import constants
from ..core.enums import OvertimePolicy
from ..core.exceptions import ConfigurationError
from .model import PayPolicy, StatutoryRates


def build_policy(values: Optional[dict] = None) -> PayPolicy:
    values = dict(values or {})
    defaults = PayPolicy()

    def pick(key):
        v = values.get(key)
        return getattr(defaults, key) if v in (None, "") else v

    overtime = pick("overtime")
    if not isinstance(overtime, OvertimePolicy):
        try:
            overtime = OvertimePolicy(str(overtime).strip().lower())
        except ValueError:
            raise ConfigurationError(f"Unknown overtime policy: {overtime!r}")

    timezone = str(pick("timezone"))
    load_timezone(timezone)

    err = ConfigurationError
    return PayPolicy(
        expected_monthly_hours=require_positive(pick("expected_monthly_hours"), "expected_monthly_hours", error=err),
        expected_daily_hours=float(require_positive(pick("expected_daily_hours"), "expected_daily_hours", error=err)),
        tolerance_minutes=float(require_non_negative(pick("tolerance_minutes"), "tolerance_minutes", error=err)),
        break_threshold_hours=float(require_positive(pick("break_threshold_hours"), "break_threshold_hours", error=err)),
        break_minutes_if_unsplit=float(
            require_non_negative(pick("break_minutes_if_unsplit"), "break_minutes_if_unsplit", error=err)
        ),
        timezone=timezone,
        overtime=overtime,
    )


def _brackets(raw) -> tuple:
    out = []
    for i, item in enumerate(raw):
        width, rate = item
        w = None if width is None else require_positive(width, f"paye_brackets[{i}].width", error=ConfigurationError)
        out.append((w, require_non_negative(rate, f"paye_brackets[{i}].rate", error=ConfigurationError)))
    if not out or out[-1][0] is not None:
        raise ConfigurationError("The last PAYE bracket must be open-ended (width None)")
    return tuple(out)


def build_statutory_rates(values: Optional[dict] = None) -> StatutoryRates:
    values = dict(values or {})
    err = ConfigurationError

    def rate(key, default: Decimal) -> Decimal:
        v = values.get(key)
        return default if v in (None, "") else require_non_negative(v, key, error=err)

    return StatutoryRates(
        ssnit_employee_rate=rate("ssnit_employee_rate", constants.SSNIT_EMPLOYEE_RATE),
        ssnit_employer_rate=rate("ssnit_employer_rate", constants.SSNIT_EMPLOYER_RATE),
        ssnit_tier1_rate=rate("ssnit_tier1_rate", constants.SSNIT_TIER1_RATE),
        ssnit_tier2_rate=rate("ssnit_tier2_rate", constants.SSNIT_TIER2_RATE),
        ssnit_ceiling=rate("ssnit_ceiling", constants.SSNIT_CEILING),
        paye_brackets=_brackets(values["paye_brackets"]) if values.get("paye_brackets") else constants.PAYE_BRACKETS,
    )
