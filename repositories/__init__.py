"""
Repository package providing MongoDB data access for tax rates,
employees, payslips and payroll runs.
"""
from .taxRate_repository import TaxRateRepository
from .employee_repository import EmployeeRepository
from .payslip_repository import PayslipRepository, PayrollRepository

__all__ = [
    'TaxRateRepository',
    'EmployeeRepository',
    'PayslipRepository',
    'PayrollRepository'
]
