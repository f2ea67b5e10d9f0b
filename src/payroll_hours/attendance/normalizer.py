from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional, Tuple

from ..common.datetime_utils import date_key_from_value, local_date_key, parse_timestamp
from ..core.enums import PunchKind
from .model import Adjustment, AttendanceRecord, Session


@dataclass(frozen=True)
class ParsedSession:
    start: Optional[datetime]
    end: Optional[datetime]

    @property
    def is_closed(self) -> bool:
        return self.start is not None and self.end is not None


@dataclass(frozen=True)
class ParsedPunch:
    kind: PunchKind
    time: datetime


@dataclass(frozen=True)
class ParsedRecord:
    """An AttendanceRecord with every timestamp parsed and its local date resolved."""

    source: AttendanceRecord
    date_key: str
    primary: Optional[ParsedSession]
    secondary: Optional[ParsedSession]
    punches: Tuple[ParsedPunch, ...]
    requested_primary: Optional[ParsedSession]
    requested_secondary: Optional[ParsedSession]

    @property
    def adjustment(self) -> Optional[Adjustment]:
        return self.source.adjustment

    @property
    def record_id(self):
        return self.source.record_id

    def dedupe_key(self) -> tuple:
        if self.punches:
            return ("punches", self.punches)
        return ("sessions", self.primary, self.secondary)


def _parse_session(session: Optional[Session], tz: tzinfo) -> Optional[ParsedSession]:
    if session is None or session.is_empty:
        return None
    start = parse_timestamp(session.start, tz) if session.start is not None else None
    end = parse_timestamp(session.end, tz) if session.end is not None else None
    return ParsedSession(start=start, end=end)


def _parse_punch(punch, tz: tzinfo) -> ParsedPunch:
    kind = PunchKind.parse(punch.kind)
    if kind is None:
        raise ValueError(f"unknown punch kind {punch.kind!r}")
    if punch.time is None:
        raise ValueError("punch without time")
    return ParsedPunch(kind=kind, time=parse_timestamp(punch.time, tz))


def _first_instant(*candidates) -> Optional[datetime]:
    for c in candidates:
        if c is not None:
            return c
    return None


def parse_record(record: AttendanceRecord, tz: tzinfo) -> ParsedRecord:
    """Parse all timestamps of one record.

    Raises ValueError/TypeError when any timestamp or punch is malformed; the
    caller skips the whole record in that case.
    """
    primary = _parse_session(record.primary_session, tz)
    secondary = _parse_session(record.secondary_session, tz)
    punches = tuple(_parse_punch(p, tz) for p in record.punches or ())

    adj = record.adjustment
    requested_primary = _parse_session(adj.requested_primary, tz) if adj else None
    requested_secondary = _parse_session(adj.requested_secondary, tz) if adj else None

    if record.work_date not in (None, ""):
        date_key = date_key_from_value(record.work_date, tz)
    else:
        first = _first_instant(
            primary.start if primary else None,
            punches[0].time if punches else None,
            secondary.start if secondary else None,
            requested_primary.start if requested_primary else None,
        )
        if first is None:
            raise ValueError("record has no date and no timestamps")
        date_key = local_date_key(first, tz)

    return ParsedRecord(
        source=record,
        date_key=date_key,
        primary=primary,
        secondary=secondary,
        punches=punches,
        requested_primary=requested_primary,
        requested_secondary=requested_secondary,
    )
