"""
Utility functions for calculating tax and related payroll amounts.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from config.payroll_config import MONEY_QUANTUM
from utils.error_utils import ValidationError

HUNDRED = Decimal('100')


def to_decimal(value, field_name='value'):
    """
    Convert a stored or submitted number to Decimal.

    Floats go through str() so 0.1 stays 0.1.

    Raises:
        ValidationError: If the value is not numeric
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")
    return result


def optional_decimal(value, field_name='value'):
    """Like to_decimal, but passes None through."""
    if value is None:
        return None
    return to_decimal(value, field_name)


def quantize_money(amount):
    """Round an amount to the cent."""
    return to_decimal(amount).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def percentage_of(amount, rate):
    """Return rate percent of amount (rate given as e.g. 6 for 6%)."""
    return amount * rate / HUNDRED


def calculate_income_tax(gross_income, brackets):
    """
    Calculate progressive income tax over a bracket schedule.

    Brackets are sorted by min_income before use. A bracket with no
    max_income, or one whose width is not positive, absorbs all remaining
    income. A bracket with a fixed_amount contributes that amount once,
    however much income falls inside it; otherwise the income inside the
    bracket is taxed at its rate. Gaps between brackets are not checked
    here, which is the job of configuration validation.

    Args:
        gross_income (Decimal): Gross income, must not be negative
        brackets (iterable): Objects with min_income, max_income, rate and fixed_amount

    Returns:
        Decimal: Income tax owed, rounded to the cent

    Raises:
        ValidationError: If gross_income is negative
    """
    gross_income = to_decimal(gross_income, 'gross_income')
    if gross_income < 0:
        raise ValidationError("gross_income must not be negative")

    remaining_income = gross_income
    total_tax = Decimal('0')

    for bracket in sorted(brackets, key=lambda b: b.min_income):
        if remaining_income <= 0:
            break

        capacity = None
        if bracket.max_income is not None:
            capacity = bracket.max_income - bracket.min_income

        if capacity is not None and capacity > 0:
            income_in_bracket = min(remaining_income, capacity)
        else:
            income_in_bracket = remaining_income

        if bracket.fixed_amount is not None:
            total_tax += bracket.fixed_amount
        else:
            total_tax += percentage_of(income_in_bracket, bracket.rate)

        remaining_income -= income_in_bracket

    return quantize_money(total_tax)


def calculate_deduction_amount(gross_income, deduction):
    """
    Amount withheld for one "other deduction" rule.

    Percentage rules take value percent of gross; fixed rules take value.
    Either is clamped to max_amount when one is set.
    """
    if deduction.type == 'percentage':
        amount = percentage_of(gross_income, deduction.value)
    else:
        amount = deduction.value

    if deduction.max_amount is not None:
        amount = min(amount, deduction.max_amount)

    return quantize_money(amount)


def calculate_effective_rate(total_deductions, gross_income):
    """Total deductions as a percentage of gross; zero when there is no gross."""
    if gross_income == 0:
        return Decimal('0.00')
    return quantize_money(total_deductions / gross_income * HUNDRED)


def split_salary(salary, components):
    """
    Split a salary into payslip components.

    Args:
        salary (Decimal): Salary for the period
        components (dict): Component name -> share of salary

    Returns:
        dict: Component name -> amount rounded to the cent
    """
    salary = to_decimal(salary, 'salary')
    return {
        name: quantize_money(salary * share)
        for name, share in components.items()
    }
