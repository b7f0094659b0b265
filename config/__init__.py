"""
Central configuration exports for the application.
Combines base configuration with payroll constants.
"""
# 1. Import Core Configuration
from .base_config import Config

# 2. Import Payroll Constants
from .payroll_config import (
    PAYSLIP_ID_PREFIX,
    PAYROLL_ID_PREFIX,
    MONEY_QUANTUM,
    SALARY_COMPONENTS,
    FALLBACK_DEDUCTION_RATES,
    DEDUCTION_TYPES,
    PAYSLIP_STATUSES,
    PAYROLL_STATUSES
)

# 3. Explicit Exports
__all__ = [
    # Core Configuration
    'Config',

    # Payroll Constants
    'PAYSLIP_ID_PREFIX',
    'PAYROLL_ID_PREFIX',
    'MONEY_QUANTUM',
    'SALARY_COMPONENTS',
    'FALLBACK_DEDUCTION_RATES',
    'DEDUCTION_TYPES',
    'PAYSLIP_STATUSES',
    'PAYROLL_STATUSES',
    'validate_configuration'
]

# 4. Validation Checks (Production Safety)
def validate_configuration():
    """Validate critical configuration settings."""
    try:
        if not Config.MONGO_URI:
            raise RuntimeError("MongoDB URI must be configured")

        if Config.PAYROLL_MAX_WORKERS < 1:
            raise RuntimeError("PAYROLL_MAX_WORKERS must be at least 1")

        # Verify payroll constants are valid
        if sum(SALARY_COMPONENTS.values()) != 1:
            raise RuntimeError("Salary components must add up to the full salary")

        for name, rate in FALLBACK_DEDUCTION_RATES.items():
            if not 0 <= rate < 1:
                raise RuntimeError(f"Fallback rate '{name}' must be between 0 and 1")

        return True
    except (AssertionError, AttributeError, TypeError) as e:
        raise RuntimeError(f"Invalid configuration: {str(e)}") from e

# Run validation when the package is imported
validate_configuration()
