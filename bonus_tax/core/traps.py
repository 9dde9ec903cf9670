from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from .brackets import BONUS_MONTHS, BONUS_TAX_BRACKETS, TaxBracket
from .progressive import bonus_tax, round_cents, to_decimal

D = Decimal


@dataclass(frozen=True)
class BracketTrap:
    """Bonus range just above a monthly-average threshold.

    Any bonus strictly between ``threshold`` and ``trap_end`` nets less after
    tax than a bonus of exactly ``threshold``.
    """

    threshold: D
    trap_end: D
    rate_below: D
    rate_above: D
    tax_jump: D

    def contains(self, bonus: D) -> bool:
        return self.threshold < bonus < self.trap_end


def bracket_traps(brackets: Sequence[TaxBracket] = BONUS_TAX_BRACKETS) -> list[BracketTrap]:
    traps: list[BracketTrap] = []
    for below, above in zip(brackets, brackets[1:]):
        if below.limit is None:
            break
        threshold = below.limit * BONUS_MONTHS
        net_at_threshold = threshold - bonus_tax(threshold, brackets)
        tax_jump = threshold * (above.rate - below.rate) - (above.quick_deduction - below.quick_deduction)
        trap_end = (net_at_threshold - above.quick_deduction) / (1 - above.rate)
        traps.append(
            BracketTrap(
                threshold=threshold,
                trap_end=round_cents(trap_end),
                rate_below=below.rate,
                rate_above=above.rate,
                tax_jump=round_cents(tax_jump),
            )
        )
    return traps


def find_trap(bonus: float | int | str | Decimal) -> BracketTrap | None:
    amount = to_decimal(bonus)
    for trap in bracket_traps():
        if trap.contains(amount):
            return trap
    return None


__all__ = ["BracketTrap", "bracket_traps", "find_trap"]
