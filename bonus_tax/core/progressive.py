from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from .brackets import ANNUAL_TAX_BRACKETS, BONUS_MONTHS, BONUS_TAX_BRACKETS, TaxBracket

D = Decimal
_CENT = D("0.01")
_ZERO = D("0.00")


def to_decimal(value: float | int | str | Decimal) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def round_cents(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def select_bracket(brackets: Sequence[TaxBracket], amount: D) -> TaxBracket:
    """Return the first bracket whose (inclusive) limit covers ``amount``.

    Falls back to the top bracket when nothing matches.
    """
    for bracket in brackets:
        if bracket.limit is None or amount <= bracket.limit:
            return bracket
    return brackets[-1]


def comprehensive_tax(
    taxable_income: float | int | str | Decimal,
    brackets: Sequence[TaxBracket] = ANNUAL_TAX_BRACKETS,
) -> D:
    """Tax on annual comprehensive income using the quick-deduction shortcut.

    Non-positive income is clamped to zero tax.
    """
    ti = to_decimal(taxable_income)
    if ti <= 0:
        return _ZERO
    bracket = select_bracket(brackets, ti)
    return round_cents(ti * bracket.rate - bracket.quick_deduction)


def bonus_tax(
    bonus: float | int | str | Decimal,
    brackets: Sequence[TaxBracket] = BONUS_TAX_BRACKETS,
) -> D:
    """Tax on a bonus taxed separately from salary.

    The band is picked from the monthly average (``bonus / 12``) but the rate and
    quick deduction are applied to the whole bonus, so crossing a monthly
    threshold re-rates every unit of the bonus.
    """
    amount = to_decimal(bonus)
    if amount <= 0:
        return _ZERO
    bracket = select_bracket(brackets, amount / BONUS_MONTHS)
    return round_cents(amount * bracket.rate - bracket.quick_deduction)


def marginal_tax(
    taxable_income: float | int | str | Decimal,
    brackets: Sequence[TaxBracket] = ANNUAL_TAX_BRACKETS,
) -> D:
    ti = max(D("0"), to_decimal(taxable_income))
    tax = D("0")
    lower = D("0")
    for bracket in brackets:
        upper = bracket.limit if bracket.limit is not None else ti
        if ti > lower:
            span = min(ti, upper) - lower
            if span > 0:
                tax += span * bracket.rate
        if bracket.limit is None or ti <= bracket.limit:
            break
        lower = bracket.limit
    return round_cents(tax)


__all__ = [
    "bonus_tax",
    "comprehensive_tax",
    "marginal_tax",
    "round_cents",
    "select_bracket",
    "to_decimal",
]
