# ------------------------------------------------------------
# models/employee_model.py
# ------------------------------------------------------------
"""
Employee model, limited to the fields payroll processing reads.

Employee documents carry more (bank details, tax identifiers, contact
information); those are passed through untouched and never read here.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from utils.payroll.taxRates_utils import to_decimal


@dataclass(frozen=True)
class EmployeeTaxContext:
    """The subset of an employee the tax engine consumes."""
    country_code: str
    region_code: Optional[str] = None
    additional_withholding: Decimal = Decimal('0')

    @staticmethod
    def from_dict(location, tax_settings=None):
        tax_settings = tax_settings or {}
        return EmployeeTaxContext(
            country_code=(location or {}).get('country_code'),
            region_code=(location or {}).get('region_code') or None,
            additional_withholding=to_decimal(
                tax_settings.get('additional_withholding') or 0, 'additional_withholding'
            )
        )


@dataclass(frozen=True)
class Employee:
    employee_id: str
    name: str
    salary: Decimal
    location: dict
    email: Optional[str] = None
    status: str = "Active"
    tax_settings: dict = field(default_factory=dict)

    def tax_context(self):
        return EmployeeTaxContext.from_dict(self.location, self.tax_settings)

    @staticmethod
    def from_document(doc):
        return Employee(
            employee_id=doc.get('employee_id'),
            name=doc.get('name'),
            email=doc.get('email'),
            salary=to_decimal(doc.get('salary', 0), 'salary'),
            status=doc.get('status', 'Active'),
            location=dict(doc.get('location') or {}),
            tax_settings=dict(doc.get('tax_settings') or {})
        )
