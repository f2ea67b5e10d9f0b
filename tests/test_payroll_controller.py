from __future__ import annotations

import io
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pandas as pd
import pytest
from flask import Flask

from payroll_hours.attendance.model import Adjustment, AttendanceRecord, Session
from payroll_hours.core.enums import AdjustmentStatus
from payroll_hours.core.exceptions import ValidationError
from payroll_hours.payroll.controller import XLSX_MIMETYPE, period_from_args, register
from payroll_hours.payroll.model import CompensationProfile, PayPeriod
from payroll_hours.payroll.service import PayslipService


class FakeAttendanceRepo:
    def __init__(self, records):
        self._records = records

    def get_records_for_period(self, employee_id, *, start: date, end: date):
        return [r for r in self._records if r.employee_id == employee_id]


class FakeCompensationRepo:
    def __init__(self, salaries):
        self._salaries = salaries

    def get_profile(self, employee_id):
        salary = self._salaries.get(employee_id)
        return None if salary is None else CompensationProfile(employee_id, Decimal(salary))

    def list_active_employee_ids(self):
        return ["A", "NOSALARY"]


class ExplodingService:
    def get_payslip(self, *args, **kwargs):
        raise RuntimeError("database is on fire")


def _records():
    return [
        AttendanceRecord(
            record_id=1,
            employee_id="A",
            work_date="2026-01-02",
            adjustment=Adjustment(
                status=AdjustmentStatus.APPROVED,
                requested_primary=Session("2026-01-02T08:00:00Z", "2026-01-02T16:00:00Z"),
                applied=True,
            ),
        ),
        AttendanceRecord(
            record_id=2,
            employee_id="A",
            work_date="2026-01-03",
            primary_session=Session("2026-01-03T08:00:00Z", "2026-01-03T12:00:00Z"),
            adjustment=Adjustment(status=AdjustmentStatus.PENDING),
        ),
    ]


@pytest.fixture
def client():
    compensation = FakeCompensationRepo({"A": "1760"})
    service = PayslipService(FakeAttendanceRepo(_records()), compensation)
    app = Flask(__name__)
    register(app, SimpleNamespace(payslip_service=service, compensation_repo=compensation))
    return app.test_client()


def test_hours_endpoint(client):
    resp = client.get("/api/hours/A?start=2026-01-01&end=2026-01-31")

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["actual_hours_worked"] == 8.0
    assert data["excluded_dates"] == ["2026-01-03"]
    assert [d["source"] for d in data["days"]] == ["adjustment", "sessions"]
    assert data["warnings"][0]["type"] == "ambiguous_period"
    assert data["warnings"][0]["reason"] == "pending adjustment"
    assert data["days"][1]["excluded_because"] == "pending adjustment"


def test_payslip_endpoint(client):
    resp = client.get("/api/payslips/A?year=2026&month=1")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["gross_pay"] == 80.0
    assert body["data"]["period_end"] == "2026-01-31"


def test_payslip_without_salary_asks_for_setup(client):
    resp = client.get("/api/payslips/NOSALARY?year=2026&month=1")

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["success"] is False
    assert body["requiresSalarySetup"] is True


def test_payslip_without_period_is_rejected(client):
    resp = client.get("/api/payslips/A")

    assert resp.status_code == 400
    assert "Pay period required" in resp.get_json()["error"]


def test_invalidate_endpoint(client):
    client.get("/api/payslips/A?year=2026&month=1")

    resp = client.post("/api/payslips/A/invalidate")

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"invalidated": 1}


def test_unexpected_errors_are_500():
    app = Flask(__name__)
    register(app, SimpleNamespace(payslip_service=ExplodingService(), compensation_repo=None))

    resp = app.test_client().get("/api/payslips/A?year=2026&month=1")

    assert resp.status_code == 500
    assert resp.get_json()["success"] is False


def test_statutory_report_is_an_excel_workbook(client):
    resp = client.get("/api/reports/statutory.xlsx?pay_date=2026-01-31")

    assert resp.status_code == 200
    assert resp.mimetype == XLSX_MIMETYPE
    sheets = pd.read_excel(io.BytesIO(resp.data), sheet_name=None)
    assert set(sheets) == {"Statutory", "Summary"}
    assert list(sheets["Statutory"]["employee_id"]) == ["A"]
    assert sheets["Summary"]["missing_profiles"][0] == "NOSALARY"


def test_period_from_args_variants():
    assert period_from_args({"pay_date": "2026-01-25"}) == PayPeriod(date(2025, 12, 26), date(2026, 1, 25))
    assert period_from_args({"start": "2026-01-01", "end": "2026-01-15"}).end == date(2026, 1, 15)

    with pytest.raises(ValidationError):
        period_from_args({"start": "2026-01-01"})
    with pytest.raises(ValidationError):
        period_from_args({"year": "2026", "month": "13"})
