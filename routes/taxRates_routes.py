# ------------------------------------------------------------
#                   routes/taxRates_routes.py
# ------------------------------------------------------------
"""
Tax-rate configuration endpoints and the tax calculation preview.
"""
from flask import Blueprint, request, jsonify, current_app
import logging

from models.employee_model import EmployeeTaxContext
from utils.defense.validation_utils import validate_request_data, validate_boolean
from utils.error_utils import NotFoundError, ValidationError
from utils.time_utils import parse_datetime

logger = logging.getLogger(__name__)

tax_rates = Blueprint('tax_rates', __name__)

@tax_rates.route('/api/tax-rates', methods=['GET'])
def list_tax_rates():
    """List tax-rate configurations, optionally filtered by country_code and is_active."""
    country_code = request.args.get('country_code') or None
    is_active = request.args.get('is_active')
    if is_active is not None:
        is_active = validate_boolean(is_active, 'is_active')

    configs = current_app.tax_rate_service.list_tax_rates(country_code=country_code, is_active=is_active)
    return jsonify({
        "success": True,
        "tax_rates": [config.to_dict() for config in configs]
    }), 200

@tax_rates.route('/api/tax-rates', methods=['POST'])
@validate_request_data(['country_code', 'name', 'income_tax_brackets', 'currency'])
def create_tax_rate():
    data = request.get_json()
    config = current_app.tax_rate_service.create_tax_rate(data)
    return jsonify({
        "success": True,
        "tax_rate": config.to_dict()
    }), 201

@tax_rates.route('/api/tax-rates/<tax_rate_id>', methods=['GET'])
def get_tax_rate(tax_rate_id):
    config = current_app.tax_rate_service.get_tax_rate(tax_rate_id)
    return jsonify({
        "success": True,
        "tax_rate": config.to_dict()
    }), 200

@tax_rates.route('/api/tax-rates/<tax_rate_id>', methods=['PUT'])
def update_tax_rate(tax_rate_id):
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        raise ValidationError("No data provided")

    config = current_app.tax_rate_service.update_tax_rate(tax_rate_id, data)
    return jsonify({
        "success": True,
        "tax_rate": config.to_dict()
    }), 200

@tax_rates.route('/api/tax-rates/calculate', methods=['POST'])
@validate_request_data(['gross_income'])
def calculate_tax():
    """
    Preview the deduction breakdown for a gross amount.

    Body: gross_income plus either employee_id, or location
    (country_code, region_code) with optional tax_settings. An optional
    as_of date evaluates the configuration valid at that time.
    """
    data = request.get_json()

    if data.get('employee_id'):
        employee = current_app.employee_repository.find_by_employee_id(data['employee_id'])
        if employee is None:
            raise NotFoundError("Employee not found")
        context = employee.tax_context()
    elif isinstance(data.get('location'), dict):
        context = EmployeeTaxContext.from_dict(data['location'], data.get('tax_settings'))
    else:
        raise ValidationError("Either employee_id or location is required")

    try:
        as_of = parse_datetime(data.get('as_of'))
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Invalid as_of date: {str(e)}")

    result = current_app.tax_calculation_service.calculate_tax(context, data['gross_income'], as_of=as_of)
    return jsonify({
        "success": True,
        "calculation": result.to_dict()
    }), 200
