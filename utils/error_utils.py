"""
Application error types and helpers for turning them into JSON responses.
"""
import logging
from flask import jsonify

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that carry an HTTP status and an error code."""

    status_code = 500
    code = "APP_ERROR"

    def __init__(self, message, status_code=None, code=None, details=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.details = details or {}

    def to_dict(self):
        payload = {
            "success": False,
            "message": self.message,
            "code": self.code
        }
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    """Invalid input: malformed request data, negative income, bad brackets."""
    status_code = 400
    code = "VALIDATION_ERROR"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class DatabaseError(AppError):
    status_code = 500
    code = "DATABASE_ERROR"


class TaxConfigurationNotFoundError(NotFoundError):
    """
    No active, date-valid tax configuration exists for a jurisdiction.

    Callers assembling payslips are expected to catch this and apply
    their own fallback estimate.
    """
    code = "TAX_CONFIGURATION_NOT_FOUND"

    def __init__(self, country_code, region_code=None, as_of=None):
        message = (
            f"No tax rate found for location: {country_code}, {region_code or 'N/A'}"
        )
        details = {"country_code": country_code, "region_code": region_code}
        if as_of is not None:
            details["as_of"] = as_of.isoformat()
        super().__init__(message, details=details)
        self.country_code = country_code
        self.region_code = region_code
        self.as_of = as_of


def handle_error(error):
    """
    Build a Flask response for an AppError.

    Args:
        error (AppError): Error raised by a route or service

    Returns:
        tuple: (Response, status_code)
    """
    if error.status_code >= 500:
        logger.error(f"{error.code}: {error.message}")
    else:
        logger.info(f"{error.code}: {error.message}")
    return jsonify(error.to_dict()), error.status_code

