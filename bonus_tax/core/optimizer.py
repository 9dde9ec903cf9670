"""Search for the bonus/salary split that minimizes total tax.

Two searches are available:

* ``grid`` (default) scans ``bonus_part`` from 0 to the whole bonus on a fixed
  step and keeps the full curve as ``search_path`` for consumers that plot it.
* ``exact`` evaluates only the splits where the curve can bend or jump. The
  total tax is linear between those points and every bonus-table jump is
  upward, so the cheapest candidate is the global minimum.
"""
from __future__ import annotations

import logging
from decimal import ROUND_FLOOR, Decimal
from typing import Callable, Dict, List

from .brackets import (
    ANNUAL_TAX_BRACKETS,
    BONUS_MONTHS,
    BONUS_TAX_BRACKETS,
    STANDARD_DEDUCTION,
)
from .models import CalculationResult, EmployeeData, OptimizationSummary, SearchPoint
from .progressive import bonus_tax, comprehensive_tax, round_cents, to_decimal

D = Decimal

MIN_GRID_STEP = D("100")
GRID_SAMPLES = 50
MONTHS = D("12")

STRATEGY_ALL_BONUS = "Plan A: whole bonus taxed separately"
STRATEGY_ALL_SALARY = "Plan B: whole bonus merged into salary"
STRATEGY_OPTIMAL = "Plan C: optimal split"

logger = logging.getLogger("bonus_tax.optimizer")

Evaluator = Callable[[D, D, str], CalculationResult]
Optimizer = Callable[[EmployeeData], OptimizationSummary]


def annual_base_taxable(employee: EmployeeData) -> D:
    """Salary-side taxable base for the year before any bonus is merged in."""
    base = (
        employee.monthly_salary * MONTHS
        - STANDARD_DEDUCTION
        - employee.social_insurance * MONTHS
        - employee.additional_deductions * MONTHS
        - employee.other_deductions * MONTHS
    )
    return max(D("0"), base)


def grid_step(
    annual_bonus: D,
    *,
    min_step: D | int = MIN_GRID_STEP,
    samples: int = GRID_SAMPLES,
) -> D:
    # a step below one unit would never reach the right edge
    samples = max(1, samples)
    floor_step = (to_decimal(annual_bonus) / samples).to_integral_value(rounding=ROUND_FLOOR)
    return max(to_decimal(min_step), floor_step, D("1"))


def _build_evaluator(employee: EmployeeData) -> Evaluator:
    base = annual_base_taxable(employee)
    gross_total = employee.monthly_salary * MONTHS + employee.annual_bonus
    social = employee.social_insurance * MONTHS

    def _evaluate(bonus_part: D, salary_part: D, name: str) -> CalculationResult:
        bonus_part = round_cents(bonus_part)
        salary_part = round_cents(salary_part)
        s_tax = comprehensive_tax(base + salary_part)
        b_tax = bonus_tax(bonus_part)
        total = s_tax + b_tax
        return CalculationResult(
            strategy_name=name,
            bonus_as_taxable=bonus_part,
            salary_as_taxable=salary_part,
            total_tax=total,
            net_income=gross_total - social - total,
            bonus_tax=b_tax,
            salary_tax=s_tax,
        )

    return _evaluate


def _summarize(
    best: CalculationResult,
    all_bonus: CalculationResult,
    all_salary: CalculationResult,
    path: list[SearchPoint],
    mode: str,
) -> OptimizationSummary:
    savings = max(all_bonus.total_tax, all_salary.total_tax) - best.total_tax
    return OptimizationSummary(
        best_strategy=best,
        all_bonus_strategy=all_bonus,
        all_salary_strategy=all_salary,
        savings=savings,
        search_path=path,
        search_mode=mode,
    )


def optimize(
    employee: EmployeeData,
    *,
    min_step: D | int = MIN_GRID_STEP,
    samples: int = GRID_SAMPLES,
) -> OptimizationSummary:
    evaluate = _build_evaluator(employee)
    annual_bonus = employee.annual_bonus

    all_bonus = evaluate(annual_bonus, D("0"), STRATEGY_ALL_BONUS)
    all_salary = evaluate(D("0"), annual_bonus, STRATEGY_ALL_SALARY)

    step = grid_step(annual_bonus, min_step=min_step, samples=samples)
    path: list[SearchPoint] = []
    best: CalculationResult | None = None
    bonus_part = D("0")
    while bonus_part <= annual_bonus:
        current = evaluate(bonus_part, annual_bonus - bonus_part, STRATEGY_OPTIMAL)
        path.append(SearchPoint(bonus_part=current.bonus_as_taxable, total_tax=current.total_tax))
        if best is None or current.total_tax < best.total_tax:
            best = current
        bonus_part += step

    if not path or path[-1].bonus_part != annual_bonus:
        # grid did not land on the right edge
        edge = evaluate(annual_bonus, D("0"), STRATEGY_OPTIMAL)
        path.append(SearchPoint(bonus_part=edge.bonus_as_taxable, total_tax=all_bonus.total_tax))
        if best is None or edge.total_tax < best.total_tax:
            best = edge

    logger.debug(
        "Grid scan finished: step=%s samples=%s best_bonus_part=%s best_total_tax=%s",
        step,
        len(path),
        best.bonus_as_taxable,
        best.total_tax,
    )
    return _summarize(best, all_bonus, all_salary, path, "grid")


def candidate_bonus_parts(annual_bonus: D, base: D) -> list[D]:
    """Bonus parts where the total-tax curve can change slope or jump."""
    candidates = {annual_bonus}
    if annual_bonus >= 0:
        candidates.add(D("0"))
    for bracket in BONUS_TAX_BRACKETS:
        if bracket.limit is None:
            continue
        threshold = bracket.limit * BONUS_MONTHS
        if D("0") <= threshold <= annual_bonus:
            candidates.add(threshold)
    for bracket in ANNUAL_TAX_BRACKETS:
        if bracket.limit is None:
            continue
        bonus_part = annual_bonus - (bracket.limit - base)
        if D("0") <= bonus_part <= annual_bonus:
            candidates.add(bonus_part)
    return sorted(candidates)


def optimize_exact(employee: EmployeeData) -> OptimizationSummary:
    evaluate = _build_evaluator(employee)
    annual_bonus = employee.annual_bonus

    all_bonus = evaluate(annual_bonus, D("0"), STRATEGY_ALL_BONUS)
    all_salary = evaluate(D("0"), annual_bonus, STRATEGY_ALL_SALARY)

    path: list[SearchPoint] = []
    best: CalculationResult | None = None
    for bonus_part in candidate_bonus_parts(annual_bonus, annual_base_taxable(employee)):
        current = evaluate(bonus_part, annual_bonus - bonus_part, STRATEGY_OPTIMAL)
        path.append(SearchPoint(bonus_part=current.bonus_as_taxable, total_tax=current.total_tax))
        if best is None or current.total_tax < best.total_tax:
            best = current

    logger.debug(
        "Exact search finished: candidates=%s best_bonus_part=%s best_total_tax=%s",
        len(path),
        best.bonus_as_taxable,
        best.total_tax,
    )
    return _summarize(best, all_bonus, all_salary, path, "exact")


_OPTIMIZERS: Dict[str, Optimizer] = {
    "grid": optimize,
    "exact": optimize_exact,
}


class UnknownSearchModeError(KeyError):
    pass


def get_optimizer(mode: str) -> Optimizer:
    key = (mode or "").lower()
    try:
        return _OPTIMIZERS[key]
    except KeyError as exc:
        raise UnknownSearchModeError(f"No optimizer registered for search mode {mode!r}") from exc


def list_search_modes() -> List[str]:
    return sorted(_OPTIMIZERS)


__all__ = [
    "GRID_SAMPLES",
    "MIN_GRID_STEP",
    "STRATEGY_ALL_BONUS",
    "STRATEGY_ALL_SALARY",
    "STRATEGY_OPTIMAL",
    "UnknownSearchModeError",
    "annual_base_taxable",
    "candidate_bonus_parts",
    "get_optimizer",
    "grid_step",
    "list_search_modes",
    "optimize",
    "optimize_exact",
]
