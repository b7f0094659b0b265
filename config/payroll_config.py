"""
Static payroll configuration settings that don't vary by jurisdiction.
These settings define standard calculations and default values used across all employees.
Jurisdiction-specific tax rates are retrieved dynamically from MongoDB.
"""
from decimal import Decimal

# Identifier prefixes for generated documents
PAYSLIP_ID_PREFIX = "PS"
PAYROLL_ID_PREFIX = "PAY"

# Money is stored and reported to the cent
MONEY_QUANTUM = Decimal('0.01')

# Share of an employee's salary assigned to each payslip component
SALARY_COMPONENTS = {
    'basic': Decimal('0.60'),
    'hra': Decimal('0.24'),
    'special_allowance': Decimal('0.16')
}

# Flat estimate used when no tax configuration applies to an employee
FALLBACK_DEDUCTION_RATES = {
    'pf': Decimal('0.072'),   # 7.2% provident fund
    'tds': Decimal('0.18')    # 18% tax deducted at source (simplified)
}

# Deduction rule types accepted in a tax configuration
DEDUCTION_TYPES = ('percentage', 'fixed')

# Payslip and payroll lifecycle states
PAYSLIP_STATUSES = ('Generated', 'Paid', 'Failed')
PAYROLL_STATUSES = ('Pending', 'Processing', 'Completed', 'Failed')
