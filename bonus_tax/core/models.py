from decimal import Decimal, InvalidOperation
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


_CENT = Decimal("0.01")
# largest magnitude the engine can carry to cents within the default Decimal context
MAX_AMOUNT = Decimal("1e15")

SearchMode = Literal["grid", "exact"]


def _quantize_decimal(value: Decimal | None) -> Decimal | None:
    if value is None:
        return None
    try:
        return value.quantize(_CENT)
    except InvalidOperation as exc:
        raise ValueError(f"Amount {value} cannot be expressed in cents") from exc


class EmployeeData(BaseModel):
    monthly_salary: Decimal = Field(
        ...,
        ge=-MAX_AMOUNT,
        le=MAX_AMOUNT,
        description="Monthly salary before deductions",
        validation_alias=AliasChoices("monthly_salary", "monthlySalary"),
    )
    annual_bonus: Decimal = Field(
        Decimal("0.00"),
        ge=-MAX_AMOUNT,
        le=MAX_AMOUNT,
        description="Year-end bonus total",
        validation_alias=AliasChoices("annual_bonus", "annualBonus"),
    )
    social_insurance: Decimal = Field(
        Decimal("0.00"),
        ge=-MAX_AMOUNT,
        le=MAX_AMOUNT,
        description="Monthly social insurance and housing fund contributions",
        validation_alias=AliasChoices("social_insurance", "socialInsurance"),
    )
    additional_deductions: Decimal = Field(
        Decimal("0.00"),
        ge=-MAX_AMOUNT,
        le=MAX_AMOUNT,
        description="Monthly special additional deductions (children, elderly care, ...)",
        validation_alias=AliasChoices("additional_deductions", "additionalDeductions"),
    )
    other_deductions: Decimal = Field(
        Decimal("0.00"),
        ge=-MAX_AMOUNT,
        le=MAX_AMOUNT,
        description="Other monthly deductions",
        validation_alias=AliasChoices("other_deductions", "otherDeductions"),
    )

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    _quantize_amounts = field_validator(
        "monthly_salary",
        "annual_bonus",
        "social_insurance",
        "additional_deductions",
        "other_deductions",
        mode="after",
    )(_quantize_decimal)


class CalculationResult(BaseModel):
    strategy_name: str
    bonus_as_taxable: Decimal
    salary_as_taxable: Decimal
    total_tax: Decimal
    net_income: Decimal
    bonus_tax: Decimal
    salary_tax: Decimal

    model_config = ConfigDict(frozen=True)


class SearchPoint(BaseModel):
    bonus_part: Decimal
    total_tax: Decimal

    model_config = ConfigDict(frozen=True)


class OptimizationSummary(BaseModel):
    best_strategy: CalculationResult
    all_bonus_strategy: CalculationResult
    all_salary_strategy: CalculationResult
    savings: Decimal
    search_path: list[SearchPoint] = Field(default_factory=list)
    search_mode: SearchMode = "grid"

    model_config = ConfigDict(frozen=True)
