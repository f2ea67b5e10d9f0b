"""Example: compute a payslip through the service layer (no Flask).

Controllers stay thin; the pay rules live in the engine behind PayslipService.
"""

import importlib
import json
import sys

from config import get_settings_module

from payroll_hours.container import build_container
from payroll_hours.payroll.model import PayPeriod


def main(employee_id: str, year: int, month: int) -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        pay_policy=settings.PAY_POLICY,
        statutory=settings.STATUTORY,
    )
    period = PayPeriod.calendar_month(year, month)
    payslip = container.payslip_service.get_payslip(employee_id, period, force_recompute=True)
    print(json.dumps(payslip.to_dict(), indent=2))


if __name__ == "__main__":
    main(sys.argv[1], int(sys.argv[2]), int(sys.argv[3]))
