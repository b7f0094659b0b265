# --------------------------------------------------------#
#                   utils/__init__.py                     #
# --------------------------------------------------------#
"""
Utility modules for the payroll tax application.
Provides centralized access to shared utility functions and classes.
"""

# ---------------------------------------#
#        Error Handling Utilities        #
# ---------------------------------------#
from .error_utils import (
    AppError,
    ValidationError,
    NotFoundError,
    DatabaseError,
    TaxConfigurationNotFoundError,
    handle_error
)

# ---------------------------------------#
#      Time Management Utilities         #
# ---------------------------------------#
from .time_utils import (
    utcnow,
    parse_datetime,
    format_datetime
)

# ---------------------------------------#
#        Database Utilities              #
# ---------------------------------------#
from .database_utils import safe_object_id

# ---------------------------------------#
#          Payroll Utilities             #
# ---------------------------------------#
from .payroll import (
    to_decimal,
    quantize_money,
    calculate_income_tax,
    calculate_deduction_amount,
    calculate_effective_rate,
    split_salary
)

__all__ = [
    # Error Handling
    'AppError',
    'ValidationError',
    'NotFoundError',
    'DatabaseError',
    'TaxConfigurationNotFoundError',
    'handle_error',

    # Time Management
    'utcnow',
    'parse_datetime',
    'format_datetime',

    # Database
    'safe_object_id',

    # Payroll
    'to_decimal',
    'quantize_money',
    'calculate_income_tax',
    'calculate_deduction_amount',
    'calculate_effective_rate',
    'split_salary'
]
