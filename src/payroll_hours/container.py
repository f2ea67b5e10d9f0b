from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .database.connection import DBConfig, DatabaseConnection
from .payroll.engine import HoursEngine, PayslipEngine
from .payroll.mysql_payroll_repository import (
    MySQLCompensationRepository,
    MySQLDeductionRepository,
    MySQLPayslipRepository,
)
from .payroll.service import PayslipService
from .payroll.settings import build_policy, build_statutory_rates


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository
    compensation_repo: MySQLCompensationRepository
    deduction_repo: MySQLDeductionRepository
    payslip_repo: MySQLPayslipRepository

    payslip_service: PayslipService


def build_container(*, db_config: dict, pay_policy: Optional[dict] = None, statutory: Optional[dict] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    compensation_repo = MySQLCompensationRepository(conn)
    deduction_repo = MySQLDeductionRepository(conn)
    payslip_repo = MySQLPayslipRepository(conn)

    policy = build_policy(pay_policy)
    engine = PayslipEngine(policy, build_statutory_rates(statutory), hours_engine=HoursEngine(policy))
    payslip_service = PayslipService(
        attendance_repo,
        compensation_repo,
        deductions=deduction_repo,
        payslips=payslip_repo,
        engine=engine,
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        compensation_repo=compensation_repo,
        deduction_repo=deduction_repo,
        payslip_repo=payslip_repo,
        payslip_service=payslip_service,
    )
