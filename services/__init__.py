# ------------------------------------------------------------
# services/__init__.py
# ------------------------------------------------------------
"""
Service layer package for business logic abstraction.

This package implements the service layer pattern, separating
business logic from routes and data access layers.
Contains the tax calculation, tax-rate management, payslip and
payroll services.
"""
import logging

# Import core services
from .id_service import IDService
from .taxCalculation_service import TaxCalculationService, init_tax_calculation_service
from .taxRate_service import TaxRateService
from .payslip_service import PayslipService
from .payroll_service import PayrollService

# Initialize package-level logger
logger = logging.getLogger(__name__)

# Define exported symbols
__all__ = [
    'IDService',
    'TaxCalculationService',
    'init_tax_calculation_service',
    'TaxRateService',
    'PayslipService',
    'PayrollService',

    # Service provider registration
    'register_services'
]

# Package metadata
__version__ = '1.0.0'

def register_services(app) -> None:
    """
    Register all service implementations with the application.

    This function builds every service from the repositories attached to
    the app and attaches them to the app as attributes.

    Args:
        app: Flask application instance with repositories and id_service set
    """
    try:
        tax_calculation_service = init_tax_calculation_service(app)
        tax_rate_service = TaxRateService(app.tax_rate_repository)
        payslip_service = PayslipService(
            app.payslip_repository,
            tax_calculation_service,
            app.id_service
        )
        payroll_service = PayrollService(
            app.payroll_repository,
            app.employee_repository,
            payslip_service,
            app.id_service,
            max_workers=app.config.get('PAYROLL_MAX_WORKERS', 8)
        )

        app.tax_calculation_service = tax_calculation_service
        app.tax_rate_service = tax_rate_service
        app.payslip_service = payslip_service
        app.payroll_service = payroll_service

        logger.info("All services registered successfully")
    except Exception as e:
        logger.error(f"Error registering services: {str(e)}")
        raise
