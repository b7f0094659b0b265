# --------------------------------------#
#         models/__init__.py            #
# --------------------------------------#
"""
Models package for database entity representations.
Provides a unified interface to the tax, employee and payslip models.
"""
import logging

from .taxRate_model import (
    TaxBracket,
    OtherDeduction,
    TaxRateConfiguration,
    TaxCalculationResult
)
from .employee_model import Employee, EmployeeTaxContext
from .payslip_model import serialize_document, money_map

# Initialize package-level logger
logger = logging.getLogger(__name__)

__all__ = [
    'TaxBracket',
    'OtherDeduction',
    'TaxRateConfiguration',
    'TaxCalculationResult',
    'Employee',
    'EmployeeTaxContext',
    'serialize_document',
    'money_map'
]
