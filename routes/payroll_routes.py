# ------------------------------------------------------------
#                   routes/payroll_routes.py
# ------------------------------------------------------------
"""
Payroll run and payslip endpoints.
"""
from flask import Blueprint, request, jsonify, current_app
import logging

from models.payslip_model import serialize_document
from utils.defense.validation_utils import validate_request_data
from utils.error_utils import NotFoundError, ValidationError
from utils.time_utils import parse_datetime, utcnow

logger = logging.getLogger(__name__)

payroll = Blueprint('payroll', __name__)

def _request_date(data):
    """Payroll/payslip date from the request body, defaulting to now."""
    try:
        return parse_datetime(data.get('date')) or utcnow()
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Invalid date: {str(e)}")

@payroll.route('/api/payroll', methods=['GET'])
def list_payrolls():
    payrolls = current_app.payroll_service.list_payrolls()
    return jsonify({
        "success": True,
        "payrolls": [serialize_document(p) for p in payrolls]
    }), 200

@payroll.route('/api/payroll', methods=['POST'])
@validate_request_data(['period'])
def create_payroll():
    data = request.get_json()
    created = current_app.payroll_service.create_payroll(data['period'], _request_date(data))
    return jsonify({
        "success": True,
        "payroll": serialize_document(created)
    }), 201

@payroll.route('/api/payroll/<payroll_id>', methods=['GET'])
def get_payroll(payroll_id):
    found = current_app.payroll_service.get_payroll(payroll_id)
    return jsonify({
        "success": True,
        "payroll": serialize_document(found)
    }), 200

@payroll.route('/api/payroll/<payroll_id>', methods=['PUT'])
def update_payroll(payroll_id):
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        raise ValidationError("No data provided")

    updated = current_app.payroll_service.update_payroll(payroll_id, data)
    return jsonify({
        "success": True,
        "payroll": serialize_document(updated)
    }), 200

@payroll.route('/api/payroll/<payroll_id>', methods=['DELETE'])
def delete_payroll(payroll_id):
    current_app.payroll_service.delete_payroll(payroll_id)
    return jsonify({
        "success": True,
        "message": "Payroll deleted"
    }), 200

@payroll.route('/api/payroll/<payroll_id>/process', methods=['POST'])
def process_payroll(payroll_id):
    """Generate payslips for every active employee; per-employee failures are reported, not raised."""
    outcome = current_app.payroll_service.process_payroll(payroll_id)
    return jsonify(dict(outcome, success=True)), 200

@payroll.route('/api/payslips', methods=['GET'])
def list_payslips():
    payslips = current_app.payslip_service.list_payslips(
        period=request.args.get('period'),
        employee_id=request.args.get('employee_id'),
        status=request.args.get('status')
    )
    return jsonify({
        "success": True,
        "payslips": [serialize_document(p) for p in payslips]
    }), 200

@payroll.route('/api/payslips', methods=['POST'])
@validate_request_data(['employee_id', 'period'])
def create_payslip():
    data = request.get_json()
    employee = current_app.employee_repository.find_by_employee_id(data['employee_id'])
    if employee is None:
        raise NotFoundError("Employee not found")

    payslip = current_app.payslip_service.create_payslip(employee, data['period'], _request_date(data))
    return jsonify({
        "success": True,
        "payslip": serialize_document(payslip)
    }), 201

@payroll.route('/api/payslips/<payslip_id>', methods=['GET'])
def get_payslip(payslip_id):
    payslip = current_app.payslip_service.get_payslip(payslip_id)
    return jsonify({
        "success": True,
        "payslip": serialize_document(payslip)
    }), 200

@payroll.route('/api/payslips/<payslip_id>', methods=['PUT'])
@validate_request_data(['status'])
def update_payslip(payslip_id):
    """Status change, e.g. Generated -> Paid with the payment reference."""
    data = request.get_json()
    payslip = current_app.payslip_service.update_payslip_status(
        payslip_id, data['status'], data.get('payment_id')
    )
    return jsonify({
        "success": True,
        "payslip": serialize_document(payslip)
    }), 200

@payroll.route('/api/payslips/employee/<employee_id>', methods=['GET'])
def get_employee_payslips(employee_id):
    payslips = current_app.payslip_service.get_payslips_by_employee(employee_id)
    return jsonify({
        "success": True,
        "payslips": [serialize_document(p) for p in payslips]
    }), 200
