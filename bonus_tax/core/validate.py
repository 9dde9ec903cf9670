from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from .models import EmployeeData


@dataclass(frozen=True)
class IssueTemplate:
    code: str
    message: str


_AMOUNT_FIELDS = (
    "monthly_salary",
    "annual_bonus",
    "social_insurance",
    "additional_deductions",
    "other_deductions",
)

ISSUE_NEGATIVE_AMOUNT = IssueTemplate(
    "{field}_negative",
    "Amounts must be zero or positive.",
)
ISSUE_NOT_FINITE = IssueTemplate(
    "{field}_not_finite",
    "Amounts must be finite numbers.",
)


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None


def _get_value(item: Any, field: str) -> Any:
    if isinstance(item, dict):
        return item.get(field)
    return getattr(item, field, None)


def validate_employee_data(employee: EmployeeData | dict[str, Any]) -> list[str]:
    """Issue codes for inputs the optimizer would accept but should not be given.

    The engine itself never rejects anything; callers decide what to do with
    the returned codes.
    """
    issues: list[str] = []
    for field in _AMOUNT_FIELDS:
        amount = _to_decimal(_get_value(employee, field))
        if amount is None:
            continue
        if not amount.is_finite():
            issues.append(ISSUE_NOT_FINITE.code.format(field=field))
        elif amount < 0:
            issues.append(ISSUE_NEGATIVE_AMOUNT.code.format(field=field))
    return issues


def issue_messages(issues: list[str]) -> dict[str, str]:
    messages: dict[str, str] = {}
    for code in issues:
        for template in (ISSUE_NEGATIVE_AMOUNT, ISSUE_NOT_FINITE):
            suffix = template.code.replace("{field}", "")
            if code.endswith(suffix):
                messages[code] = template.message
                break
    return messages


__all__ = ["IssueTemplate", "issue_messages", "validate_employee_data"]
