# ------------------------------------------------------------
# utils/defense/validation_utils.py
# ------------------------------------------------------------
import re
import logging
from functools import wraps
from flask import request, jsonify

from config.payroll_config import DEDUCTION_TYPES
from utils.error_utils import ValidationError
from utils.payroll.taxRates_utils import to_decimal, optional_decimal
from utils.time_utils import parse_datetime

logger = logging.getLogger(__name__)

TAX_RATE_REQUIRED_FIELDS = ['country_code', 'name', 'income_tax_brackets', 'currency']

def validate_request_data(required_fields):
    """
    Decorator to validate required fields in request data

    Usage:
    @validate_request_data(['country_code', 'name'])
    def create_tax_rate():
        # Your route logic here
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            data = request.get_json(silent=True)
            if not data or not isinstance(data, dict):
                return jsonify({
                    "success": False,
                    "message": "No data provided"
                }), 400

            missing_fields = [
                field for field in required_fields
                if data.get(field) in (None, '', [])
            ]

            if missing_fields:
                return jsonify({
                    "success": False,
                    "message": f"Missing required fields: {', '.join(missing_fields)}"
                }), 400

            return f(*args, **kwargs)

        return decorated_function
    return decorator

def validate_country_code(code):
    """
    Validate a two-letter country code (e.g., US, GB, IN)
    """
    return isinstance(code, str) and bool(re.match(r'^[A-Z]{2}$', code))

def validate_region_code(code):
    """
    Validate a region code (e.g., CA, NSW, MH)
    """
    return isinstance(code, str) and bool(re.match(r'^[A-Z0-9]{1,6}$', code))

def validate_currency_code(code):
    """
    Validate a three-letter currency code, case-insensitive
    """
    return isinstance(code, str) and bool(re.match(r'^[A-Za-z]{3}$', code))

def validate_required_fields(data, required_fields):
    """
    Validate presence of required fields in data
    Returns (is_valid, missing_fields)
    """
    if not isinstance(data, dict):
        return False, ["Data must be a dictionary"]

    missing = [field for field in required_fields if data.get(field) in (None, '', [])]
    return len(missing) == 0, missing

def validate_boolean(value, field_name):
    """
    Accept a JSON boolean or a 'true'/'false' style string.

    Raises:
        ValidationError: For anything else, so "false" never reads as truthy
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ('true', '1', 'yes'):
            return True
        if text in ('false', '0', 'no'):
            return False
    raise ValidationError(f"{field_name} must be true or false")

def validate_non_negative(value, field_name):
    """Convert value to Decimal, raising ValidationError if it is negative."""
    number = to_decimal(value, field_name)
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number

def validate_tax_brackets(brackets):
    """
    Validate an income tax schedule.

    Brackets, once sorted by min_income, must start at zero and tile income
    space: each bracket ends where the next begins, and only the last one
    may be open-ended. Fixed-amount brackets are allowed anywhere.

    Args:
        brackets (list): Bracket dicts as submitted

    Returns:
        list: Normalised bracket dicts, sorted by min_income

    Raises:
        ValidationError: Describing the first problem found
    """
    if not isinstance(brackets, list) or len(brackets) == 0:
        raise ValidationError("At least one tax bracket is required")

    normalised = []
    for index, bracket in enumerate(brackets):
        if not isinstance(bracket, dict):
            raise ValidationError(f"Tax bracket {index} must be an object")

        min_income = validate_non_negative(bracket.get('min_income', 0), f"income_tax_brackets[{index}].min_income")
        max_income = optional_decimal(bracket.get('max_income'), f"income_tax_brackets[{index}].max_income")
        rate = validate_non_negative(bracket.get('rate') or 0, f"income_tax_brackets[{index}].rate")
        fixed_amount = bracket.get('fixed_amount')
        if fixed_amount is not None:
            fixed_amount = validate_non_negative(fixed_amount, f"income_tax_brackets[{index}].fixed_amount")

        if max_income is not None and max_income <= min_income:
            raise ValidationError(
                f"Tax bracket {index}: max_income must be greater than min_income"
            )

        entry = {"min_income": min_income, "rate": rate}
        if max_income is not None:
            entry["max_income"] = max_income
        if fixed_amount is not None:
            entry["fixed_amount"] = fixed_amount
        normalised.append(entry)

    normalised.sort(key=lambda b: b["min_income"])

    if normalised[0]["min_income"] != 0:
        raise ValidationError("The lowest tax bracket must start at 0")

    for current, following in zip(normalised, normalised[1:]):
        upper = current.get("max_income")
        if upper is None:
            raise ValidationError("Only the highest tax bracket may be open-ended")
        if following["min_income"] > upper:
            raise ValidationError(
                f"Gap between tax brackets: nothing covers {upper} to {following['min_income']}"
            )
        if following["min_income"] < upper:
            raise ValidationError(
                f"Overlapping tax brackets at {following['min_income']}"
            )

    return normalised

def validate_other_deductions(deductions):
    """
    Validate the other_deductions list of a tax configuration.

    Returns:
        list: Normalised deduction dicts
    """
    if deductions is None:
        return []
    if not isinstance(deductions, list):
        raise ValidationError("other_deductions must be a list")

    normalised = []
    for index, deduction in enumerate(deductions):
        if not isinstance(deduction, dict):
            raise ValidationError(f"Deduction {index} must be an object")

        name = deduction.get('name')
        if not name or not isinstance(name, str):
            raise ValidationError(f"Deduction {index}: name is required")

        deduction_type = deduction.get('type')
        if deduction_type not in DEDUCTION_TYPES:
            raise ValidationError(
                f"Deduction '{name}': type must be one of {', '.join(DEDUCTION_TYPES)}"
            )

        entry = {
            "name": name,
            "type": deduction_type,
            "value": validate_non_negative(deduction.get('value', 0), f"{name}.value"),
            "is_required": bool(deduction.get('is_required', False))
        }
        if deduction.get('max_amount') is not None:
            entry["max_amount"] = validate_non_negative(deduction['max_amount'], f"{name}.max_amount")
        normalised.append(entry)

    return normalised

def validate_tax_rate_data(data):
    """
    Validate and normalise a complete tax configuration payload.

    Dates are parsed to naive UTC datetimes and numbers to Decimal. Missing
    optional fields are not filled in here; the service applies defaults.

    Raises:
        ValidationError: If anything is missing or malformed
    """
    is_valid, missing = validate_required_fields(data, TAX_RATE_REQUIRED_FIELDS)
    if not is_valid:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    if not validate_country_code(data['country_code']):
        raise ValidationError(f"Invalid country code: {data['country_code']}")

    region_code = data.get('region_code') or None
    if region_code is not None and not validate_region_code(region_code):
        raise ValidationError(f"Invalid region code: {region_code}")

    if not validate_currency_code(data['currency']):
        raise ValidationError(f"Invalid currency code: {data['currency']}")

    try:
        effective_date = parse_datetime(data.get('effective_date'))
        expiry_date = parse_datetime(data.get('expiry_date'))
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Invalid date: {str(e)}")

    if effective_date is not None and expiry_date is not None and expiry_date <= effective_date:
        raise ValidationError("expiry_date must be after effective_date")

    validated = dict(data)
    validated.update({
        "region_code": region_code,
        "income_tax_brackets": validate_tax_brackets(data['income_tax_brackets']),
        "social_security_rate": validate_non_negative(data.get('social_security_rate') or 0, 'social_security_rate'),
        "employer_contribution_rate": validate_non_negative(
            data.get('employer_contribution_rate') or 0, 'employer_contribution_rate'
        ),
        "other_deductions": validate_other_deductions(data.get('other_deductions')),
        "effective_date": effective_date,
        "expiry_date": expiry_date
    })
    if data.get('is_active') is not None:
        validated['is_active'] = validate_boolean(data['is_active'], 'is_active')
    else:
        validated.pop('is_active', None)
    return validated
