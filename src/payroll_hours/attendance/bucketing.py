from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from .normalizer import ParsedRecord

log = logging.getLogger(__name__)


def bucket_by_date(records: Iterable[ParsedRecord]) -> Dict[str, List[ParsedRecord]]:
    """Group by local YYYY-MM-DD key, keeping input order inside each bucket."""
    buckets: Dict[str, List[ParsedRecord]] = {}
    for rec in records:
        buckets.setdefault(rec.date_key, []).append(rec)
    return buckets


def deduplicate(records: Iterable[ParsedRecord]) -> Tuple[List[ParsedRecord], int]:
    """Keep the first record per distinct punches array / session pair.

    Returns (unique records, number discarded).
    """
    seen = set()
    unique: List[ParsedRecord] = []
    dropped = 0
    for rec in records:
        key = rec.dedupe_key()
        if key in seen:
            dropped += 1
            log.debug("duplicate record %s on %s discarded", rec.record_id, rec.date_key)
            continue
        seen.add(key)
        unique.append(rec)
    return unique, dropped
