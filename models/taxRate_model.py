# ------------------------------------------------------------
# models/taxRate_model.py
# ------------------------------------------------------------
"""
Tax-rate configuration models.

A configuration is a versioned policy document scoped to a jurisdiction
(country, optionally narrowed to a region). Stored documents in the
tax_rates collection look like this:

{
  "country_code": "US",
  "region_code": "CA",              # omitted for country-wide rates
  "name": "California 2024",
  "description": "...",
  "income_tax_brackets": [
    {"min_income": 0, "max_income": 10000, "rate": 10},
    {"min_income": 10000, "rate": 20}
  ],
  "social_security_rate": 6.2,
  "employer_contribution_rate": 7.65,
  "other_deductions": [
    {"name": "SDI", "type": "percentage", "value": 1.1,
     "max_amount": 1601.60, "is_required": true}
  ],
  "currency": "USD",
  "effective_date": <datetime>,
  "expiry_date": <datetime>,        # optional, exclusive
  "is_active": true,
  "created_at": <datetime>,
  "updated_at": <datetime>
}

Numbers are stored as plain BSON doubles and read back through
Decimal(str(value)).
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from utils.payroll.taxRates_utils import to_decimal, optional_decimal


def _as_number(value):
    """Decimal -> float for BSON/JSON, None passes through."""
    return float(value) if value is not None else None


@dataclass(frozen=True)
class TaxBracket:
    """One rung of a progressive schedule. max_income None means unbounded."""
    min_income: Decimal
    max_income: Optional[Decimal] = None
    rate: Decimal = Decimal('0')
    fixed_amount: Optional[Decimal] = None

    @staticmethod
    def from_dict(data):
        return TaxBracket(
            min_income=to_decimal(data.get('min_income', 0), 'min_income'),
            max_income=optional_decimal(data.get('max_income'), 'max_income'),
            rate=to_decimal(data.get('rate') or 0, 'rate'),
            fixed_amount=optional_decimal(data.get('fixed_amount'), 'fixed_amount')
        )

    def to_dict(self):
        doc = {
            "min_income": _as_number(self.min_income),
            "rate": _as_number(self.rate)
        }
        if self.max_income is not None:
            doc["max_income"] = _as_number(self.max_income)
        if self.fixed_amount is not None:
            doc["fixed_amount"] = _as_number(self.fixed_amount)
        return doc


@dataclass(frozen=True)
class OtherDeduction:
    """
    A named deduction rule, either a percentage of gross or a fixed amount.

    is_required is informational only; the value and cap apply either way.
    """
    name: str
    type: str
    value: Decimal
    max_amount: Optional[Decimal] = None
    is_required: bool = False

    @staticmethod
    def from_dict(data):
        return OtherDeduction(
            name=data.get('name'),
            type=data.get('type'),
            value=to_decimal(data.get('value', 0), 'value'),
            max_amount=optional_decimal(data.get('max_amount'), 'max_amount'),
            is_required=bool(data.get('is_required', False))
        )

    def to_dict(self):
        doc = {
            "name": self.name,
            "type": self.type,
            "value": _as_number(self.value),
            "is_required": self.is_required
        }
        if self.max_amount is not None:
            doc["max_amount"] = _as_number(self.max_amount)
        return doc


@dataclass(frozen=True)
class TaxRateConfiguration:
    country_code: str
    name: str
    income_tax_brackets: Tuple[TaxBracket, ...]
    currency: str
    effective_date: datetime
    region_code: Optional[str] = None
    description: Optional[str] = None
    social_security_rate: Decimal = Decimal('0')
    employer_contribution_rate: Decimal = Decimal('0')
    other_deductions: Tuple[OtherDeduction, ...] = field(default_factory=tuple)
    expiry_date: Optional[datetime] = None
    is_active: bool = True
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_applicable(self, as_of):
        """
        True when the configuration is active and as_of falls inside
        [effective_date, expiry_date).
        """
        if not self.is_active:
            return False
        if self.effective_date > as_of:
            return False
        return self.expiry_date is None or self.expiry_date > as_of

    @staticmethod
    def from_document(doc):
        """Build a configuration from a MongoDB document (or validated request data)."""
        doc_id = doc.get('_id', doc.get('id'))
        return TaxRateConfiguration(
            id=str(doc_id) if doc_id is not None else None,
            country_code=doc.get('country_code'),
            region_code=doc.get('region_code') or None,
            name=doc.get('name'),
            description=doc.get('description'),
            income_tax_brackets=tuple(
                TaxBracket.from_dict(b) for b in doc.get('income_tax_brackets', [])
            ),
            social_security_rate=to_decimal(
                doc.get('social_security_rate') or 0, 'social_security_rate'
            ),
            employer_contribution_rate=to_decimal(
                doc.get('employer_contribution_rate') or 0, 'employer_contribution_rate'
            ),
            other_deductions=tuple(
                OtherDeduction.from_dict(d) for d in doc.get('other_deductions') or []
            ),
            currency=doc.get('currency'),
            effective_date=doc.get('effective_date'),
            expiry_date=doc.get('expiry_date'),
            is_active=bool(doc.get('is_active', True)),
            created_at=doc.get('created_at'),
            updated_at=doc.get('updated_at')
        )

    def to_document(self):
        """MongoDB document for this configuration, without _id."""
        doc = {
            "country_code": self.country_code,
            "name": self.name,
            "income_tax_brackets": [b.to_dict() for b in self.income_tax_brackets],
            "social_security_rate": _as_number(self.social_security_rate),
            "employer_contribution_rate": _as_number(self.employer_contribution_rate),
            "other_deductions": [d.to_dict() for d in self.other_deductions],
            "currency": self.currency,
            "effective_date": self.effective_date,
            "is_active": self.is_active
        }
        if self.region_code:
            doc["region_code"] = self.region_code
        if self.description is not None:
            doc["description"] = self.description
        if self.expiry_date is not None:
            doc["expiry_date"] = self.expiry_date
        if self.created_at is not None:
            doc["created_at"] = self.created_at
        if self.updated_at is not None:
            doc["updated_at"] = self.updated_at
        return doc

    def to_dict(self):
        """JSON-friendly representation for API responses."""
        doc = self.to_document()
        doc["id"] = self.id
        for key in ("effective_date", "expiry_date", "created_at", "updated_at"):
            if doc.get(key) is not None:
                doc[key] = doc[key].isoformat()
        return doc


@dataclass(frozen=True)
class TaxCalculationResult:
    """
    Deduction breakdown for one gross amount.

    employer_contribution is reported for transparency and is not part of
    total_deductions.
    """
    gross_income: Decimal
    taxable_income: Decimal
    income_tax: Decimal
    social_security: Decimal
    employer_contribution: Decimal
    other_deductions: Tuple[Tuple[str, Decimal], ...]
    additional_withholding: Decimal
    total_deductions: Decimal
    net_income: Decimal
    effective_tax_rate: Decimal
    currency: Optional[str] = None
    tax_rate_id: Optional[str] = None

    def other_deductions_by_name(self):
        return {name: amount for name, amount in self.other_deductions}

    def to_dict(self):
        return {
            "gross_income": float(self.gross_income),
            "taxable_income": float(self.taxable_income),
            "income_tax": float(self.income_tax),
            "social_security": float(self.social_security),
            "employer_contribution": float(self.employer_contribution),
            "other_deductions": [
                {"name": name, "amount": float(amount)}
                for name, amount in self.other_deductions
            ],
            "additional_withholding": float(self.additional_withholding),
            "total_deductions": float(self.total_deductions),
            "net_income": float(self.net_income),
            "effective_tax_rate": float(self.effective_tax_rate),
            "currency": self.currency,
            "tax_rate_id": self.tax_rate_id
        }
