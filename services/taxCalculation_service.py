# ------------------------------------------------------------
# services/taxCalculation_service.py
# ------------------------------------------------------------
"""
Tax calculation service.

Resolves the tax-rate configuration for an employee's jurisdiction and turns
a gross amount into an itemised deduction breakdown. The only I/O is the
configuration lookup through the injected repository; everything else is a
pure function of its inputs, so one service instance can be shared by all
payroll worker threads.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from models.employee_model import EmployeeTaxContext
from models.taxRate_model import TaxRateConfiguration, TaxCalculationResult
from utils.error_utils import ValidationError, TaxConfigurationNotFoundError
from utils.payroll.taxRates_utils import (
    to_decimal,
    quantize_money,
    percentage_of,
    calculate_income_tax,
    calculate_deduction_amount,
    calculate_effective_rate
)
from utils.time_utils import utcnow

logger = logging.getLogger(__name__)

class TaxCalculationService:
    """
    Service for jurisdiction lookup and net-pay derivation.
    """

    def __init__(self, tax_rate_repository):
        """
        Initialize the tax calculation service.

        Args:
            tax_rate_repository: Object providing
                find_applicable(country_code, region_code, as_of)
        """
        self.tax_rate_repository = tax_rate_repository

    def resolve_tax_rate(self, country_code: str, region_code: Optional[str] = None,
                         as_of: Optional[datetime] = None) -> TaxRateConfiguration:
        """
        Find the tax configuration that applies to a jurisdiction.

        A configuration for the exact region always beats the country-wide
        one. Only active configurations whose [effective_date, expiry_date)
        window contains as_of are considered.

        Args:
            country_code: Country code, required
            region_code: Optional region code
            as_of: Evaluation time, defaults to now

        Returns:
            TaxRateConfiguration: The applicable configuration

        Raises:
            ValidationError: If country_code is empty
            TaxConfigurationNotFoundError: If nothing applies
        """
        if not country_code:
            raise ValidationError("country_code is required to resolve a tax rate")

        as_of = as_of or utcnow()

        if region_code:
            config = self.tax_rate_repository.find_applicable(country_code, region_code, as_of)
            if config is not None:
                return config
            logger.debug(f"No region tax rate for {country_code}/{region_code}, trying country-wide")

        config = self.tax_rate_repository.find_applicable(country_code, None, as_of)
        if config is not None:
            return config

        logger.warning(f"No tax rate found for {country_code}/{region_code or '-'} as of {as_of.isoformat()}")
        raise TaxConfigurationNotFoundError(country_code, region_code, as_of)

    def calculate_tax(self, employee: EmployeeTaxContext, gross_income,
                      as_of: Optional[datetime] = None) -> TaxCalculationResult:
        """
        Calculate income tax, social security and other deductions for one gross amount.

        Employer contribution is reported but never deducted. Net income is
        not floored at zero; a negative figure points at a misconfigured rate.

        Args:
            employee: Tax context (location and additional withholding)
            gross_income: Gross amount for the period, must not be negative
            as_of: Evaluation time for configuration lookup, defaults to now

        Returns:
            TaxCalculationResult: The full breakdown

        Raises:
            ValidationError: If gross_income is negative or not a number
            TaxConfigurationNotFoundError: If no configuration applies
        """
        gross_income = to_decimal(gross_income, 'gross_income')
        if gross_income < 0:
            raise ValidationError("gross_income must not be negative")
        gross_income = quantize_money(gross_income)

        config = self.resolve_tax_rate(employee.country_code, employee.region_code, as_of)

        income_tax = calculate_income_tax(gross_income, config.income_tax_brackets)
        social_security = quantize_money(percentage_of(gross_income, config.social_security_rate))
        employer_contribution = quantize_money(percentage_of(gross_income, config.employer_contribution_rate))

        other_deductions = tuple(
            (deduction.name, calculate_deduction_amount(gross_income, deduction))
            for deduction in config.other_deductions
        )
        total_other_deductions = sum((amount for _, amount in other_deductions), Decimal('0'))

        additional_withholding = quantize_money(employee.additional_withholding or 0)

        total_deductions = income_tax + social_security + total_other_deductions + additional_withholding
        net_income = gross_income - total_deductions

        return TaxCalculationResult(
            gross_income=gross_income,
            taxable_income=gross_income,
            income_tax=income_tax,
            social_security=social_security,
            employer_contribution=employer_contribution,
            other_deductions=other_deductions,
            additional_withholding=additional_withholding,
            total_deductions=total_deductions,
            net_income=net_income,
            effective_tax_rate=calculate_effective_rate(total_deductions, gross_income),
            currency=config.currency,
            tax_rate_id=config.id
        )

def init_tax_calculation_service(app):
    """
    Initialize the tax calculation service with the application's tax rate repository.

    Args:
        app: Flask application instance with tax_rate_repository set

    Returns:
        TaxCalculationService: Initialized service
    """
    return TaxCalculationService(app.tax_rate_repository)
