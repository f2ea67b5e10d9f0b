from __future__ import annotations

from zoneinfo import ZoneInfo

from payroll_hours.attendance.bucketing import bucket_by_date, deduplicate
from payroll_hours.attendance.model import AttendanceRecord, Punch, Session
from payroll_hours.attendance.normalizer import parse_record

ACCRA = ZoneInfo("Africa/Accra")

JAN3_PUNCHES = (
    Punch("in", "2026-01-03T08:00:00Z"),
    Punch("out", "2026-01-03T11:00:00Z"),
    Punch("in", "2026-01-03T12:00:00Z"),
    Punch("out", "2026-01-03T15:26:30Z"),
)


def _parsed(record_id, **kw):
    return parse_record(AttendanceRecord(record_id=record_id, employee_id="e1", **kw), ACCRA)


def test_identical_punch_arrays_collapse_to_first():
    recs = [_parsed(i, work_date="2026-01-03", punches=JAN3_PUNCHES) for i in (1, 2, 3)]

    unique, dropped = deduplicate(recs)

    assert [r.record_id for r in unique] == [1]
    assert dropped == 2


def test_punch_order_matters_for_duplicates():
    reordered = (JAN3_PUNCHES[2], JAN3_PUNCHES[3], JAN3_PUNCHES[0], JAN3_PUNCHES[1])
    recs = [
        _parsed(1, work_date="2026-01-03", punches=JAN3_PUNCHES),
        _parsed(2, work_date="2026-01-03", punches=reordered),
    ]

    unique, dropped = deduplicate(recs)

    assert len(unique) == 2
    assert dropped == 0


def test_same_instant_in_different_notation_is_a_duplicate():
    a = _parsed(1, primary_session=Session("2026-01-02T08:00:00Z", "2026-01-02T16:00:00Z"))
    b = _parsed(2, primary_session=Session("2026-01-02T08:00:00+00:00", "2026-01-02T16:00:00+00:00"))

    unique, dropped = deduplicate([a, b])

    assert [r.record_id for r in unique] == [1]
    assert dropped == 1


def test_different_secondary_session_is_distinct():
    primary = Session("2026-01-02T08:00:00Z", "2026-01-02T12:00:00Z")
    a = _parsed(1, primary_session=primary)
    b = _parsed(2, primary_session=primary, secondary_session=Session("2026-01-02T13:00:00Z", "2026-01-02T17:00:00Z"))

    unique, _ = deduplicate([a, b])

    assert len(unique) == 2


def test_bucket_by_date_keeps_input_order():
    recs = [
        _parsed(1, work_date="2026-01-03"),
        _parsed(2, work_date="2026-01-02"),
        _parsed(3, work_date="2026-01-03"),
    ]

    buckets = bucket_by_date(recs)

    assert list(buckets) == ["2026-01-03", "2026-01-02"]
    assert [r.record_id for r in buckets["2026-01-03"]] == [1, 3]
