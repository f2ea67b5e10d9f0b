from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

from ..core.enums import AdjustmentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, decode_json_column, fetchall
from .model import Adjustment, AttendanceRecord, Punch, Session
from .repository import AttendanceRepository

# First timestamp-ish value of the row, used only to narrow the SQL window.
_ROW_DAY = (
    "LEFT(COALESCE(`date`, clock_in, requested_clock_in, "
    "JSON_UNQUOTE(JSON_EXTRACT(punches, '$[0].time')), JSON_UNQUOTE(JSON_EXTRACT(punches, '$[0]'))), 10)"
)


def _session(start, end) -> Optional[Session]:
    if start in (None, "") and end in (None, ""):
        return None
    return Session(start=start or None, end=end or None)


def _punches(raw) -> tuple:
    items = decode_json_column(raw) or []
    if not isinstance(items, list):
        raise ValueError(f"punches is not a list: {items!r}")
    out = []
    for i, p in enumerate(items):
        if isinstance(p, dict):
            out.append(Punch(kind=p.get("type", p.get("kind")), time=p.get("time")))
        else:
            # Bare timestamps alternate IN/OUT.
            out.append(Punch(kind="in" if i % 2 == 0 else "out", time=p))
    return tuple(out)


def row_to_record(r: dict) -> AttendanceRecord:
    status = AdjustmentStatus.parse(r.get("adjustment_status"))
    applied = as_bool(r.get("adjustment_applied"))

    adjustment = None
    if status is not None:
        requested_primary = _session(r.get("requested_clock_in"), r.get("requested_clock_out"))
        requested_secondary = _session(r.get("requested_clock_in_2"), r.get("requested_clock_out_2"))
        if applied and requested_primary is None:
            # Applying an approval overwrites clock_in/clock_out in place.
            requested_primary = _session(r.get("clock_in"), r.get("clock_out"))
            requested_secondary = _session(r.get("clock_in_2"), r.get("clock_out_2"))
        adjustment = Adjustment(
            status=status,
            requested_primary=requested_primary,
            requested_secondary=requested_secondary,
            applied=applied,
        )

    try:
        punches = _punches(r.get("punches"))
    except ValueError:
        # Keep the row; the engine reports it as a malformed punch.
        punches = (Punch(kind=None, time=None),)

    return AttendanceRecord(
        record_id=r.get("id"),
        employee_id=r.get("employee_id"),
        work_date=r.get("date") or None,
        primary_session=_session(r.get("clock_in"), r.get("clock_out")),
        secondary_session=_session(r.get("clock_in_2"), r.get("clock_out_2")),
        punches=punches,
        adjustment=adjustment,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_records_for_period(self, employee_id, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        # One day of slack each side: UTC strings can land on a neighbouring local date.
        lo = (start - timedelta(days=1)).isoformat()
        hi = (end + timedelta(days=1)).isoformat()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, employee_id, `date`, clock_in, clock_out, clock_in_2, clock_out_2, punches,
                       adjustment_status, adjustment_applied,
                       requested_clock_in, requested_clock_out, requested_clock_in_2, requested_clock_out_2
                FROM clock_logs
                WHERE employee_id=%s AND {_ROW_DAY} BETWEEN %s AND %s
                ORDER BY created_at ASC, id ASC
                """,
                (str(employee_id), lo, hi),
            )
            return [row_to_record(r) for r in fetchall(cur)]
