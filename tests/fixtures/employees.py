from decimal import Decimal

from bonus_tax.core.models import EmployeeData

# Worked example: base 90,000 after deductions, 100,000 bonus
_SCENARIO = {
  "monthly_salary": Decimal("18000"),
  "annual_bonus": Decimal("100000"),
  "social_insurance": Decimal("3000"),
  "additional_deductions": Decimal("2500"),
  "other_deductions": Decimal("0"),
}


def make_employee(**overrides) -> EmployeeData:
  data = dict(_SCENARIO)
  data.update({key: Decimal(str(value)) for key, value in overrides.items()})
  return EmployeeData(**data)


def scenario_payload(**overrides) -> dict:
  payload = {
    "monthlySalary": 18000,
    "annualBonus": 100000,
    "socialInsurance": 3000,
    "additionalDeductions": 2500,
    "otherDeductions": 0,
  }
  payload.update(overrides)
  return payload
