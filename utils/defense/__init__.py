"""
Application defense utilities for validation.

This package provides request and payload validation used by the routes
and services before anything is written to the database.
"""

from .validation_utils import (
    validate_request_data,
    validate_country_code,
    validate_region_code,
    validate_currency_code,
    validate_required_fields,
    validate_boolean,
    validate_non_negative,
    validate_tax_brackets,
    validate_other_deductions,
    validate_tax_rate_data
)

__all__ = [
    # Validation Utilities
    'validate_request_data',
    'validate_country_code',
    'validate_region_code',
    'validate_currency_code',
    'validate_required_fields',
    'validate_boolean',
    'validate_non_negative',
    'validate_tax_brackets',
    'validate_other_deductions',
    'validate_tax_rate_data'
]

# Initialize package logger
import logging
logging.getLogger(__name__).addHandler(logging.NullHandler())
