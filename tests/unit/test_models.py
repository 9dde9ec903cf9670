from decimal import Decimal

import pytest
from pydantic import ValidationError

from bonus_tax.core.models import EmployeeData


def test_employee_accepts_camel_case_aliases():
    employee = EmployeeData.model_validate(
        {
            "monthlySalary": 18000,
            "annualBonus": "100000.005",
            "socialInsurance": 3000,
            "additionalDeductions": 2500,
        }
    )
    assert employee.monthly_salary == Decimal("18000.00")
    assert employee.annual_bonus == Decimal("100000.00")
    assert employee.other_deductions == Decimal("0.00")


def test_employee_rejects_non_finite_amounts():
    with pytest.raises(ValidationError):
        EmployeeData(monthly_salary=Decimal("NaN"))
    with pytest.raises(ValidationError):
        EmployeeData.model_validate({"monthlySalary": "Infinity"})


def test_employee_is_frozen_and_strict_about_extra_fields():
    employee = EmployeeData(monthly_salary=Decimal("10000"))
    with pytest.raises(ValidationError):
        employee.monthly_salary = Decimal("1")
    with pytest.raises(ValidationError):
        EmployeeData.model_validate({"monthlySalary": 1, "currency": "CNY"})


def test_employee_rejects_amounts_beyond_cent_precision():
    with pytest.raises(ValidationError):
        EmployeeData(monthly_salary=Decimal("1e30"))
    with pytest.raises(ValidationError):
        EmployeeData.model_validate({"monthlySalary": 1, "annualBonus": "-1e16"})
