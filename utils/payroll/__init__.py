"""
Payroll calculation utilities.

This package provides the Decimal helpers and the progressive bracket
calculation used by the tax and payslip services.
"""

from .taxRates_utils import (
    to_decimal,
    optional_decimal,
    quantize_money,
    percentage_of,
    calculate_income_tax,
    calculate_deduction_amount,
    calculate_effective_rate,
    split_salary
)

__all__ = [
    # Decimal helpers
    'to_decimal',
    'optional_decimal',
    'quantize_money',
    'percentage_of',

    # Tax-related functions
    'calculate_income_tax',
    'calculate_deduction_amount',
    'calculate_effective_rate',
    'split_salary'
]
