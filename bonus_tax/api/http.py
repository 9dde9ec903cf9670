import logging
from decimal import Decimal

from fastapi import FastAPI, HTTPException, Query

from bonus_tax import __version__
from bonus_tax.config import Settings, get_settings
from bonus_tax.lifespan import build_application_lifespan

from ..core.brackets import ANNUAL_TAX_BRACKETS, BONUS_TAX_BRACKETS, STANDARD_DEDUCTION, bracket_table
from ..core.models import MAX_AMOUNT, EmployeeData, OptimizationSummary
from ..core.optimizer import UnknownSearchModeError, get_optimizer, optimize
from ..core.progressive import bonus_tax, comprehensive_tax
from ..core.traps import bracket_traps, find_trap
from ..core.validate import issue_messages, validate_employee_data

logger = logging.getLogger("bonus_tax")


async def _announce_search_mode(_: FastAPI) -> None:
    settings = get_settings()
    logger.info(
        "Bonus optimizer ready; search_mode=%s build=%s/%s",
        settings.search_mode,
        settings.build_version,
        settings.build_sha,
    )


app = FastAPI(
    title="Bonus Split Optimizer",
    version=__version__,
    description="Find the split of a year-end bonus between separate and merged taxation that minimizes total tax.",
    lifespan=build_application_lifespan("optimizer", startup_hook=_announce_search_mode),
)


def _settings() -> Settings:
    return getattr(app.state, "settings", get_settings())


def run_optimizer(employee: EmployeeData, mode: str, settings: Settings) -> OptimizationSummary:
    optimizer = get_optimizer(mode)
    if optimizer is optimize:
        return optimize(employee, min_step=settings.min_grid_step, samples=settings.grid_samples)
    return optimizer(employee)


@app.get("/health")
def health():
    settings = _settings()
    return {
        "status": "ok",
        "search_mode": settings.search_mode,
        "build": {
            "version": settings.build_version,
            "sha": settings.build_sha,
        },
    }


@app.post("/optimize")
def optimize_split(req: EmployeeData, mode: str | None = None):
    issues = validate_employee_data(req)
    if issues:
        return {"ok": False, "issues": issues, "messages": issue_messages(issues)}
    settings = _settings()
    try:
        summary = run_optimizer(req, mode or settings.search_mode, settings)
    except UnknownSearchModeError as exc:
        raise HTTPException(status_code=400, detail=f"Unsupported search mode {mode}") from exc
    logger.info(
        "Optimized bonus split",
        extra={"search_mode": summary.search_mode, "samples": len(summary.search_path)},
    )
    return {"ok": True, "summary": summary.model_dump()}


@app.get("/tax/comprehensive")
def tax_comprehensive(taxable_income: Decimal = Query(..., ge=-MAX_AMOUNT, le=MAX_AMOUNT)):
    return {"taxable_income": taxable_income, "tax": comprehensive_tax(taxable_income)}


@app.get("/tax/bonus")
def tax_bonus(bonus: Decimal = Query(..., ge=-MAX_AMOUNT, le=MAX_AMOUNT)):
    trap = find_trap(bonus)
    return {
        "bonus": bonus,
        "tax": bonus_tax(bonus),
        "in_trap": trap is not None,
        "trap_threshold": trap.threshold if trap is not None else None,
    }


@app.get("/brackets")
def brackets():
    return {
        "standard_deduction": STANDARD_DEDUCTION,
        "comprehensive": bracket_table(ANNUAL_TAX_BRACKETS),
        "bonus": bracket_table(BONUS_TAX_BRACKETS),
    }


@app.get("/traps")
def traps():
    return {
        "traps": [
            {
                "threshold": trap.threshold,
                "trap_end": trap.trap_end,
                "rate_below": trap.rate_below,
                "rate_above": trap.rate_above,
                "tax_jump": trap.tax_jump,
            }
            for trap in bracket_traps()
        ]
    }
