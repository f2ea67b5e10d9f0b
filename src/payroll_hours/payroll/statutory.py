"""Statutory deductions (SSNIT, PAYE) over gross pay."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .model import StatutoryRates

CENT = Decimal("0.01")


def money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def paye_tax(gross: Decimal, rates: StatutoryRates) -> Decimal:
    """Progressive PAYE: each band's rate applies only to the income inside it."""
    remaining = max(Decimal(gross), Decimal("0"))
    tax = Decimal("0")
    for width, rate in rates.paye_brackets:
        if remaining <= 0:
            break
        taxed = remaining if width is None else min(remaining, width)
        tax += taxed * rate
        remaining -= taxed
    return money(tax)


@dataclass(frozen=True)
class EmployerContributions:
    ssnit_employer: Decimal
    ssnit_tier1: Decimal
    ssnit_tier2: Decimal


def ssnit_employee(gross: Decimal, rates: StatutoryRates) -> Decimal:
    return money(gross * rates.ssnit_employee_rate)


def employer_contributions(gross: Decimal, rates: StatutoryRates) -> EmployerContributions:
    # Informational only; never deducted from net pay.
    applicable = min(gross, rates.ssnit_ceiling)
    return EmployerContributions(
        ssnit_employer=money(gross * rates.ssnit_employer_rate),
        ssnit_tier1=money(applicable * rates.ssnit_tier1_rate),
        ssnit_tier2=money(applicable * rates.ssnit_tier2_rate),
    )
