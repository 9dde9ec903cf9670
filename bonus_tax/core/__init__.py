from __future__ import annotations

from .brackets import ANNUAL_TAX_BRACKETS, BONUS_TAX_BRACKETS, STANDARD_DEDUCTION, TaxBracket
from .models import CalculationResult, EmployeeData, OptimizationSummary, SearchPoint
from .optimizer import get_optimizer, optimize, optimize_exact
from .progressive import bonus_tax, comprehensive_tax

__all__ = [
    "ANNUAL_TAX_BRACKETS",
    "BONUS_TAX_BRACKETS",
    "STANDARD_DEDUCTION",
    "TaxBracket",
    "CalculationResult",
    "EmployeeData",
    "OptimizationSummary",
    "SearchPoint",
    "bonus_tax",
    "comprehensive_tax",
    "get_optimizer",
    "optimize",
    "optimize_exact",
]
