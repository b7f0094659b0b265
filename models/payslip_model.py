# ------------------------------------------------------------
# models/payslip_model.py
# ------------------------------------------------------------
"""
Payslip and payroll documents.

Payslips are written once by the payslip service and afterwards only
have their status (and payment reference) changed.

Payslip document:

{
  "payslip_id": "PS-2024-0001",
  "employee_id": "EMP-0001",
  "employee_name": "...",
  "period": "2024-05",
  "date": <datetime>,
  "gross_amount": 5000.0,
  "net_amount": 3700.0,
  "components": {"basic": ..., "hra": ..., "special_allowance": ...},
  "deductions": {"income_tax": ..., "social_security": ...,
                 "other_deductions": {"<name>": <amount>}}
             or {"pf": ..., "tds": ...} when the fallback estimate was used,
  "tax_details": {"taxable_income": ..., "effective_tax_rate": ...,
                  "employer_contribution": ..., "location": {...}},
  "status": "Generated",
  "payment_id": "...",
  "created_at": <datetime>,
  "updated_at": <datetime>
}
"""
from utils.time_utils import format_datetime


def serialize_document(doc):
    """
    Copy a payslip or payroll document into a JSON-friendly dict.

    ObjectIds become strings and datetimes become ISO strings.
    """
    if doc is None:
        return None
    result = {}
    for key, value in doc.items():
        if key == '_id':
            result['id'] = str(value)
        elif hasattr(value, 'isoformat'):
            result[key] = format_datetime(value)
        elif isinstance(value, dict):
            result[key] = serialize_document(value)
        else:
            result[key] = value
    return result


def money_map(amounts):
    """Decimal amounts -> floats for storage."""
    return {name: float(amount) for name, amount in amounts.items()}
