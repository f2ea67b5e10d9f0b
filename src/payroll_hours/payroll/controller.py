from __future__ import annotations

import io
import logging
from datetime import date, datetime
from functools import wraps

import pandas as pd
from flask import Flask, jsonify, request, send_file

from ..core.exceptions import ConfigurationError, ValidationError
from .model import PayPeriod

log = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _parse_date(value: str, field_name: str) -> date:
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")


def period_from_args(args) -> PayPeriod:
    """start+end, or pay_date (month ending on it), or year+month."""
    if args.get("start") or args.get("end"):
        return PayPeriod(_parse_date(args.get("start"), "start"), _parse_date(args.get("end"), "end"))
    if args.get("pay_date"):
        return PayPeriod.month_ending(_parse_date(args.get("pay_date"), "pay_date"))
    if args.get("year") and args.get("month"):
        try:
            return PayPeriod.calendar_month(int(args["year"]), int(args["month"]))
        except ValueError:
            raise ValidationError("year/month are invalid")
    raise ValidationError("Pay period required: start & end, pay_date, or year & month")


def _flag(value) -> bool:
    return str(value or "").strip().lower() in ("1", "true", "yes")


def register(app: Flask, container) -> None:
    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ConfigurationError as e:
                return jsonify({"success": False, "error": str(e), "requiresSalarySetup": True}), 400
            except ValidationError as e:
                return jsonify({"success": False, "error": str(e)}), 400
            except Exception:
                log.exception("unhandled error in %s", request.path)
                return jsonify({"success": False, "error": "Internal error while computing pay"}), 500

        return wrapper

    @app.route("/api/hours/<employee_id>", methods=["GET"], endpoint="api_hours")
    @json_errors
    def api_hours(employee_id: str):
        period = period_from_args(request.args)
        result = container.payslip_service.compute_hours(employee_id, period)
        return jsonify({"success": True, "data": result.to_dict()})

    @app.route("/api/payslips/<employee_id>", methods=["GET"], endpoint="api_payslip")
    @json_errors
    def api_payslip(employee_id: str):
        period = period_from_args(request.args)
        payslip = container.payslip_service.get_payslip(
            employee_id, period, force_recompute=_flag(request.args.get("force"))
        )
        return jsonify({"success": True, "data": payslip.to_dict()})

    @app.route("/api/payslips/<employee_id>/invalidate", methods=["POST"], endpoint="api_payslip_invalidate")
    @json_errors
    def api_payslip_invalidate(employee_id: str):
        dropped = container.payslip_service.invalidate(employee_id)
        return jsonify({"success": True, "data": {"invalidated": dropped}})

    @app.route("/api/reports/statutory.xlsx", methods=["GET"], endpoint="api_statutory_report")
    @json_errors
    def api_statutory_report():
        period = period_from_args(request.args)
        employee_ids = request.args.getlist("employee_id") or container.compensation_repo.list_active_employee_ids()
        report = container.payslip_service.build_statutory_report(employee_ids, period)

        rows = pd.DataFrame(report.rows)
        summary = pd.DataFrame(report.summary)
        for df in (rows, summary):
            for col in df.columns:
                if col not in ("employee_id", "missing_profiles", "employees"):
                    df[col] = df[col].astype(float)
        if "missing_profiles" in summary.columns:
            summary["missing_profiles"] = summary["missing_profiles"].apply(", ".join)

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            rows.to_excel(writer, index=False, sheet_name="Statutory")
            summary.to_excel(writer, index=False, sheet_name="Summary")
        output.seek(0)

        name = f"statutory_{period.start.isoformat()}_{period.end.isoformat()}.xlsx"
        return send_file(output, download_name=name, as_attachment=True, mimetype=XLSX_MIMETYPE)
