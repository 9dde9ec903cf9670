from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator, Sequence

D = Decimal


@dataclass(frozen=True)
class TaxBracket:
    limit: D | None
    rate: D
    quick_deduction: D

    def __iter__(self) -> Iterator[D | None]:
        return iter((self.limit, self.rate, self.quick_deduction))


# Comprehensive income, annual taxable amounts (2024)
ANNUAL_TAX_BRACKETS: tuple[TaxBracket, ...] = (
    TaxBracket(D("36000"),  D("0.03"), D("0")),
    TaxBracket(D("144000"), D("0.10"), D("2520")),
    TaxBracket(D("300000"), D("0.20"), D("16920")),
    TaxBracket(D("420000"), D("0.25"), D("31920")),
    TaxBracket(D("660000"), D("0.30"), D("52920")),
    TaxBracket(D("960000"), D("0.35"), D("85920")),
    TaxBracket(None,        D("0.45"), D("181920")),
)

# Annual one-off bonus, limits are monthly averages (bonus / 12)
BONUS_TAX_BRACKETS: tuple[TaxBracket, ...] = (
    TaxBracket(D("3000"),  D("0.03"), D("0")),
    TaxBracket(D("12000"), D("0.10"), D("210")),
    TaxBracket(D("25000"), D("0.20"), D("1410")),
    TaxBracket(D("35000"), D("0.25"), D("2660")),
    TaxBracket(D("55000"), D("0.30"), D("4410")),
    TaxBracket(D("80000"), D("0.35"), D("7160")),
    TaxBracket(None,       D("0.45"), D("15160")),
)

STANDARD_DEDUCTION = D("60000")  # 5000 * 12
BONUS_MONTHS = D("12")


def lower_bounds(brackets: Sequence[TaxBracket]) -> list[D]:
    bounds = [D("0")]
    for bracket in brackets[:-1]:
        if bracket.limit is None:
            break
        bounds.append(bracket.limit)
    return bounds


def bracket_table(brackets: Sequence[TaxBracket]) -> list[dict[str, D | None]]:
    return [
        {"limit": b.limit, "rate": b.rate, "quick_deduction": b.quick_deduction}
        for b in brackets
    ]


__all__ = [
    "ANNUAL_TAX_BRACKETS",
    "BONUS_MONTHS",
    "BONUS_TAX_BRACKETS",
    "STANDARD_DEDUCTION",
    "TaxBracket",
    "bracket_table",
    "lower_bounds",
]
