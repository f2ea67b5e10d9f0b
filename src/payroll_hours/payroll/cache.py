from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Tuple

from .model import Payslip

CacheKey = Tuple[str, date, date]


def cache_key(employee_id, start: date, end: date) -> CacheKey:
    return (str(employee_id), start, end)


class PayslipCache:
    """In-process payslip cache keyed by (employee_id, period_start, period_end).

    Entries are whole payslips and are replaced, never merged.
    """

    def __init__(self):
        self._items: Dict[CacheKey, Payslip] = {}

    def get(self, employee_id, start: date, end: date) -> Optional[Payslip]:
        return self._items.get(cache_key(employee_id, start, end))

    def put(self, payslip: Payslip) -> None:
        self._items[cache_key(payslip.employee_id, payslip.period_start, payslip.period_end)] = payslip

    def invalidate(self, employee_id) -> int:
        """Drop every cached period for one employee; returns how many were dropped."""
        emp = str(employee_id)
        keys = [k for k in self._items if k[0] == emp]
        for k in keys:
            del self._items[k]
        return len(keys)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
