# tests/fakes.py
"""
In-memory stand-ins for the MongoDB repositories and the ID service.

They honour the same contracts as the real repositories so services and
routes can be exercised without a database.
"""
import itertools
from dataclasses import replace
from datetime import datetime

from bson.objectid import ObjectId

from models.employee_model import Employee
from models.taxRate_model import TaxRateConfiguration


def make_config(country_code="US", region_code=None, brackets=None, **overrides):
    """Build a TaxRateConfiguration from plain numbers."""
    doc = {
        "country_code": country_code,
        "region_code": region_code,
        "name": overrides.pop("name", f"{country_code} {region_code or 'national'}"),
        "income_tax_brackets": brackets if brackets is not None else [
            {"min_income": 0, "max_income": 10000, "rate": 10},
            {"min_income": 10000, "rate": 20}
        ],
        "currency": overrides.pop("currency", "USD"),
        "effective_date": overrides.pop("effective_date", datetime(2020, 1, 1))
    }
    doc.update(overrides)
    return TaxRateConfiguration.from_document(doc)


def make_employee(employee_id="EMP-0001", salary=5000, country_code="US", region_code=None, **overrides):
    location = {"country_code": country_code}
    if region_code:
        location["region_code"] = region_code
    doc = {
        "employee_id": employee_id,
        "name": overrides.pop("name", f"Employee {employee_id}"),
        "salary": salary,
        "location": location,
        "status": overrides.pop("status", "Active")
    }
    doc.update(overrides)
    return Employee.from_document(doc)


class InMemoryTaxRateRepository:
    """Tax-rate repository keeping configurations in insertion order."""

    def __init__(self, configs=None):
        self._configs = []
        self.lookups = []
        for config in configs or []:
            self.add(config)

    def add(self, config):
        stored = replace(config, id=config.id or str(ObjectId()))
        self._configs.append(stored)
        return stored

    def find_applicable(self, country_code, region_code, as_of):
        self.lookups.append((country_code, region_code, as_of))
        candidates = [
            config for config in self._configs
            if config.country_code == country_code
            and (config.region_code or None) == (region_code or None)
            and config.is_applicable(as_of)
        ]
        if not candidates:
            return None
        # Same ordering as the MongoDB sort: latest effective_date, then newest id
        return max(candidates, key=lambda c: (c.effective_date, c.id))

    def list(self, country_code=None, is_active=None):
        configs = [
            config for config in self._configs
            if (country_code is None or config.country_code == country_code)
            and (is_active is None or config.is_active == is_active)
        ]
        return sorted(configs, key=lambda c: (c.country_code, c.region_code or ""))

    def get_by_id(self, tax_rate_id):
        for config in self._configs:
            if config.id == tax_rate_id:
                return config
        return None

    def create(self, config):
        now = datetime(2024, 1, 1)
        return self.add(replace(config, id=None, created_at=now, updated_at=now))

    def update(self, tax_rate_id, config):
        for index, existing in enumerate(self._configs):
            if existing.id == tax_rate_id:
                self._configs[index] = replace(
                    config, id=tax_rate_id, created_at=existing.created_at, updated_at=datetime(2024, 6, 1)
                )
                return True
        return False


class InMemoryEmployeeRepository:

    def __init__(self, employees=None):
        self.employees = list(employees or [])

    def find_by_employee_id(self, employee_id):
        for employee in self.employees:
            if employee.employee_id == employee_id:
                return employee
        return None

    def find_active(self):
        return sorted(
            (e for e in self.employees if e.status == "Active"),
            key=lambda e: e.name
        )


class InMemoryPayslipRepository:

    def __init__(self):
        self.payslips = []

    def insert(self, payslip):
        doc = dict(payslip)
        doc["_id"] = ObjectId()
        self.payslips.append(doc)
        return doc

    def find_by_payslip_id(self, payslip_id):
        for payslip in self.payslips:
            if payslip["payslip_id"] == payslip_id or str(payslip["_id"]) == payslip_id:
                return payslip
        return None

    def find(self, filters=None):
        wanted = {k: v for k, v in (filters or {}).items() if v is not None}
        return sorted(
            (p for p in self.payslips if all(p.get(k) == v for k, v in wanted.items())),
            key=lambda p: p["date"],
            reverse=True
        )

    def find_by_employee(self, employee_id):
        return sorted(
            (p for p in self.payslips if p["employee_id"] == employee_id),
            key=lambda p: p["date"],
            reverse=True
        )

    def update_status(self, payslip_id, status, payment_id=None):
        payslip = self.find_by_payslip_id(payslip_id)
        if payslip is None:
            return False
        payslip["status"] = status
        if payment_id:
            payslip["payment_id"] = payment_id
        return True


class InMemoryPayrollRepository:

    def __init__(self):
        self.payrolls = []
        self.status_history = []

    def insert(self, payroll):
        doc = dict(payroll)
        doc["_id"] = ObjectId()
        self.payrolls.append(doc)
        return doc

    def find_by_payroll_id(self, payroll_id):
        for payroll in self.payrolls:
            if payroll["payroll_id"] == payroll_id or str(payroll["_id"]) == payroll_id:
                return payroll
        return None

    def list(self):
        return sorted(self.payrolls, key=lambda p: p["created_at"], reverse=True)

    def update(self, payroll_id, fields):
        payroll = self.find_by_payroll_id(payroll_id)
        if payroll is None:
            return None
        payroll.update(fields)
        if "status" in fields:
            self.status_history.append(fields["status"])
        return payroll

    def delete(self, payroll_id):
        payroll = self.find_by_payroll_id(payroll_id)
        if payroll is None:
            return False
        self.payrolls.remove(payroll)
        return True


class FakeIDService:
    """Sequential ids in the real formats."""

    def __init__(self):
        self._payslips = itertools.count(1)
        self._payrolls = itertools.count(1)

    def generate_payslip_id(self, year):
        return f"PS-{year}-{next(self._payslips):04d}"

    def generate_payroll_id(self, year):
        return f"PAY-{year}-{next(self._payrolls):03d}"


def build_repositories(configs=None, employees=None):
    """Repository dict accepted by create_app(repositories=...)."""
    return {
        "tax_rate_repository": InMemoryTaxRateRepository(configs),
        "employee_repository": InMemoryEmployeeRepository(employees),
        "payslip_repository": InMemoryPayslipRepository(),
        "payroll_repository": InMemoryPayrollRepository(),
        "id_service": FakeIDService()
    }
