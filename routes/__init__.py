# ------------------------------------------------------------#
#                   routes/__init__.py                   #
# ------------------------------------------------------------#

"""
__init__.py for routes/

This module registers all application route blueprints with the Flask app.
It imports and registers blueprints from submodules (tax-rate routes and payroll routes).

Usage:
    from routes import register_routes
    register_routes(app)
"""
import logging
from flask import Flask

logger = logging.getLogger(__name__)

def register_routes(app: Flask) -> None:
    """
    Registers all route blueprints with the provided Flask application.

    Currently included:
      - Tax-rate routes (from routes/taxRates_routes.py)
      - Payroll and payslip routes (from routes/payroll_routes.py)

    Args:
        app (Flask): The Flask application instance.

    Raises:
        ImportError: If a blueprint module cannot be imported.
        Exception: If an error occurs during blueprint registration.
    """
    # Register tax-rate routes
    try:
        from .taxRates_routes import tax_rates
        app.register_blueprint(tax_rates)
        logger.info("Tax rate routes registered successfully.")
    except ImportError as imp_err:
        logger.error(f"Error importing tax rate routes: {imp_err}")
        raise
    except Exception as reg_err:
        logger.error(f"Error registering tax rate routes: {reg_err}")
        raise

    # Register payroll routes
    try:
        from .payroll_routes import payroll
        app.register_blueprint(payroll)
        logger.info("Payroll routes registered successfully.")
    except ImportError as imp_err:
        logger.error(f"Error importing payroll routes: {imp_err}")
        raise
    except Exception as reg_err:
        logger.error(f"Error registering payroll routes: {reg_err}")
        raise

    logger.info("All routes registered successfully.")

__all__ = ["register_routes"]
