from __future__ import annotations

import json
from zoneinfo import ZoneInfo

import pytest

from payroll_hours.attendance.mysql_attendance_repository import row_to_record
from payroll_hours.attendance.normalizer import parse_record
from payroll_hours.core.enums import AdjustmentStatus, PunchKind


def _row(**kw):
    row = {
        "id": 7,
        "employee_id": "EMP-1",
        "date": None,
        "clock_in": None,
        "clock_out": None,
        "clock_in_2": None,
        "clock_out_2": None,
        "punches": None,
        "adjustment_status": None,
        "adjustment_applied": 0,
        "requested_clock_in": None,
        "requested_clock_out": None,
        "requested_clock_in_2": None,
        "requested_clock_out_2": None,
    }
    row.update(kw)
    return row


def test_plain_sessions_row():
    rec = row_to_record(
        _row(date="2026-01-02", clock_in="2026-01-02T08:00:00Z", clock_out="2026-01-02T12:00:00Z", clock_in_2="")
    )

    assert rec.record_id == 7
    assert rec.work_date == "2026-01-02"
    assert rec.primary_session.start == "2026-01-02T08:00:00Z"
    assert rec.secondary_session is None
    assert rec.punches == ()
    assert rec.adjustment is None


def test_object_punches_keep_their_kind():
    punches = json.dumps([{"type": "in", "time": "2026-01-03T08:00:00Z"}, {"type": "out", "time": "2026-01-03T11:00:00Z"}])

    rec = row_to_record(_row(punches=punches))

    assert [p.kind for p in rec.punches] == ["in", "out"]


def test_bare_timestamp_punches_alternate_in_and_out():
    rec = row_to_record(_row(punches=b'["2026-01-03T08:00:00Z", "2026-01-03T11:00:00Z", "2026-01-03T12:00:00Z"]'))

    assert [p.kind for p in rec.punches] == ["in", "out", "in"]


def test_malformed_punches_become_an_unparseable_record():
    rec = row_to_record(_row(date="2026-01-03", punches='{"not": "a list"}'))

    with pytest.raises(ValueError):
        parse_record(rec, ZoneInfo("Africa/Accra"))


def test_pending_adjustment_keeps_requested_sessions():
    rec = row_to_record(
        _row(
            adjustment_status="pending",
            requested_clock_in="2026-01-04T08:00:00Z",
            requested_clock_out="2026-01-04T16:00:00Z",
        )
    )

    assert rec.adjustment.status == AdjustmentStatus.PENDING
    assert rec.adjustment.is_pending
    assert not rec.adjustment.is_authoritative
    assert rec.adjustment.requested_primary.end == "2026-01-04T16:00:00Z"


def test_applied_approval_without_requested_columns_uses_clock_columns():
    rec = row_to_record(
        _row(
            clock_in="2026-01-04T08:00:00Z",
            clock_out="2026-01-04T16:00:00Z",
            adjustment_status="APPROVED",
            adjustment_applied="1",
        )
    )

    assert rec.adjustment.is_authoritative
    assert rec.adjustment.requested_primary.start == "2026-01-04T08:00:00Z"


def test_unknown_adjustment_status_is_ignored():
    rec = row_to_record(_row(adjustment_status="escalated"))

    assert rec.adjustment is None


def test_mapped_punches_parse_into_kinds():
    rec = row_to_record(_row(punches='["2026-01-03T08:00:00Z", "2026-01-03T11:00:00Z"]'))

    parsed = parse_record(rec, ZoneInfo("Africa/Accra"))

    assert [p.kind for p in parsed.punches] == [PunchKind.IN, PunchKind.OUT]


@pytest.mark.parametrize("raw", ["Cancelled", "CANCELED"])
def test_cancelled_adjustment_is_kept(raw):
    rec = row_to_record(_row(date="2026-01-04", adjustment_status=raw))

    assert rec.adjustment.status == AdjustmentStatus.CANCELLED
    assert rec.adjustment.is_cancelled
    assert not rec.adjustment.is_authoritative
