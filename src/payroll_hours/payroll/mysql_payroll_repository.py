from __future__ import annotations

import json
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, decode_json_column, fetchall, fetchone
from .model import CompensationProfile, Deduction, Payslip
from .repository import CompensationRepository, DeductionRepository, PayslipRepository


class MySQLCompensationRepository(CompensationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_profile(self, employee_id) -> Optional[CompensationProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT employee_id, basic_salary FROM employees WHERE employee_id=%s",
                (str(employee_id),),
            )
            r = fetchone(cur)
            if not r or r.get("basic_salary") is None:
                return None
            return CompensationProfile(employee_id=r["employee_id"], basic_salary=as_decimal(r["basic_salary"]))

    def list_active_employee_ids(self) -> list[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT employee_id FROM employees WHERE is_active=1 ORDER BY employee_id")
            return [str(r["employee_id"]) for r in fetchall(cur)]


def row_to_deduction(r: dict) -> Optional[Deduction]:
    """Payroll history rows that are deductions: negative amount or a reason mentioning one."""
    amount = as_decimal(r.get("amount")) or Decimal("0")
    reason = (r.get("reason") or "").strip()
    if amount < 0 or "deduction" in reason.lower():
        return Deduction(description=reason or "Other Deduction", amount=abs(amount))
    return None


class MySQLDeductionRepository(DeductionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_period(self, employee_id, *, start: date, end: date) -> Sequence[Deduction]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT amount, reason
                FROM payroll_history
                WHERE employee_id=%s AND created_at BETWEEN %s AND %s
                ORDER BY created_at ASC, id ASC
                """,
                (str(employee_id), start, end),
            )
            rows = fetchall(cur)
        return [d for d in (row_to_deduction(r) for r in rows) if d is not None]


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, payslip: Payslip) -> None:
        others = json.dumps([{"description": d.description, "amount": str(d.amount)} for d in payslip.other_deductions])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payslips(
                    employee_id, period_start, period_end, basic_salary, expected_hours, actual_hours,
                    paid_hours, hours_not_worked, hourly_rate, gross_pay, ssnit_employee, paye,
                    other_deductions, total_deductions, net_pay, ssnit_employer, ssnit_tier1, ssnit_tier2,
                    excluded_dates, skipped_records
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    basic_salary=VALUES(basic_salary), expected_hours=VALUES(expected_hours),
                    actual_hours=VALUES(actual_hours), paid_hours=VALUES(paid_hours),
                    hours_not_worked=VALUES(hours_not_worked), hourly_rate=VALUES(hourly_rate),
                    gross_pay=VALUES(gross_pay), ssnit_employee=VALUES(ssnit_employee), paye=VALUES(paye),
                    other_deductions=VALUES(other_deductions), total_deductions=VALUES(total_deductions),
                    net_pay=VALUES(net_pay), ssnit_employer=VALUES(ssnit_employer),
                    ssnit_tier1=VALUES(ssnit_tier1), ssnit_tier2=VALUES(ssnit_tier2),
                    excluded_dates=VALUES(excluded_dates), skipped_records=VALUES(skipped_records)
                """,
                (
                    str(payslip.employee_id),
                    payslip.period_start,
                    payslip.period_end,
                    payslip.basic_salary,
                    payslip.expected_hours,
                    payslip.actual_hours_worked,
                    payslip.paid_hours,
                    payslip.hours_not_worked,
                    payslip.hourly_rate,
                    payslip.gross_pay,
                    payslip.ssnit_employee,
                    payslip.paye,
                    others,
                    payslip.total_deductions,
                    payslip.net_pay,
                    payslip.ssnit_employer,
                    payslip.ssnit_tier1,
                    payslip.ssnit_tier2,
                    json.dumps(list(payslip.excluded_dates)),
                    payslip.skipped_records,
                ),
            )

    def get(self, employee_id, *, start: date, end: date) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT * FROM payslips WHERE employee_id=%s AND period_start=%s AND period_end=%s",
                (str(employee_id), start, end),
            )
            r = fetchone(cur)
        if not r:
            return None
        others = decode_json_column(r.get("other_deductions")) or []
        return Payslip(
            employee_id=r["employee_id"],
            period_start=r["period_start"],
            period_end=r["period_end"],
            basic_salary=as_decimal(r["basic_salary"]),
            expected_hours=as_decimal(r["expected_hours"]),
            actual_hours_worked=float(r["actual_hours"]),
            paid_hours=float(r["paid_hours"]),
            hours_not_worked=float(r["hours_not_worked"]),
            hourly_rate=as_decimal(r["hourly_rate"]),
            gross_pay=as_decimal(r["gross_pay"]),
            ssnit_employee=as_decimal(r["ssnit_employee"]),
            paye=as_decimal(r["paye"]),
            other_deductions=tuple(Deduction(o["description"], as_decimal(o["amount"])) for o in others),
            total_deductions=as_decimal(r["total_deductions"]),
            net_pay=as_decimal(r["net_pay"]),
            ssnit_employer=as_decimal(r["ssnit_employer"]),
            ssnit_tier1=as_decimal(r["ssnit_tier1"]),
            ssnit_tier2=as_decimal(r["ssnit_tier2"]),
            excluded_dates=tuple(decode_json_column(r.get("excluded_dates")) or ()),
            skipped_records=int(r.get("skipped_records") or 0),
        )
