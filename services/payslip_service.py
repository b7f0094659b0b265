# ------------------------------------------------------------
# services/payslip_service.py
# ------------------------------------------------------------
"""
Payslip assembly.

Splits an employee's salary into components, runs the tax calculation and
stores the resulting payslip. When the employee's jurisdiction has no
applicable tax configuration, the payslip is still produced using a flat
PF + TDS estimate so that one missing configuration never blocks payroll.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from config.payroll_config import SALARY_COMPONENTS, FALLBACK_DEDUCTION_RATES, PAYSLIP_STATUSES
from models.employee_model import Employee
from models.payslip_model import money_map
from utils.error_utils import NotFoundError, ValidationError, TaxConfigurationNotFoundError
from utils.logging import log_event
from utils.payroll.taxRates_utils import quantize_money, split_salary
from utils.time_utils import utcnow

logger = logging.getLogger(__name__)

class PayslipService:
    """Service for generating and retrieving payslips."""

    def __init__(self, payslip_repository, tax_calculation_service, id_service):
        """
        Args:
            payslip_repository: Storage for payslip documents
            tax_calculation_service: TaxCalculationService instance
            id_service: Generator for payslip ids
        """
        self.payslip_repository = payslip_repository
        self.tax_calculation_service = tax_calculation_service
        self.id_service = id_service

    @staticmethod
    def calculate_fallback_deductions(gross_amount) -> Dict:
        """Flat estimate used when no tax configuration applies."""
        return {
            name: quantize_money(gross_amount * rate)
            for name, rate in FALLBACK_DEDUCTION_RATES.items()
        }

    def create_payslip(self, employee: Employee, period: str, date: datetime) -> Dict:
        """
        Build and store a payslip for one employee and period.

        Args:
            employee: Employee record
            period: Pay period label, e.g. '2024-05'
            date: Payslip date

        Returns:
            Dict: The stored payslip document

        Raises:
            DatabaseError: Storage errors propagate; only a missing or invalid
                tax configuration falls back to the estimate
        """
        components = split_salary(employee.salary, SALARY_COMPONENTS)
        gross_amount = sum(components.values())
        location = employee.location or {}

        payslip = {
            "employee_id": employee.employee_id,
            "employee_name": employee.name,
            "period": period,
            "date": date,
            "gross_amount": float(gross_amount),
            "components": money_map(components),
            "status": "Generated"
        }

        try:
            tax = self.tax_calculation_service.calculate_tax(employee.tax_context(), gross_amount, as_of=date)
        except (TaxConfigurationNotFoundError, ValidationError) as e:
            logger.warning(
                f"Tax calculation failed for employee {employee.employee_id}, "
                f"using fallback estimate: {e.message}"
            )
            deductions = self.calculate_fallback_deductions(gross_amount)
            payslip["net_amount"] = float(gross_amount - sum(deductions.values()))
            payslip["deductions"] = money_map(deductions)
            payslip["tax_fallback"] = True
            log_event(
                "payslip_tax_fallback",
                level=logging.WARNING,
                employee_id=employee.employee_id,
                reason=e.code
            )
        else:
            deductions = {
                "income_tax": float(tax.income_tax),
                "social_security": float(tax.social_security),
                "other_deductions": money_map(tax.other_deductions_by_name())
            }
            if tax.additional_withholding:
                deductions["additional_withholding"] = float(tax.additional_withholding)

            payslip["net_amount"] = float(tax.net_income)
            payslip["deductions"] = deductions
            payslip["tax_details"] = {
                "taxable_income": float(tax.taxable_income),
                "effective_tax_rate": float(tax.effective_tax_rate),
                "employer_contribution": float(tax.employer_contribution),
                "total_deductions": float(tax.total_deductions),
                "currency": tax.currency,
                "tax_rate_id": tax.tax_rate_id,
                "location": {
                    "country_code": location.get('country_code'),
                    "region_code": location.get('region_code')
                }
            }

        now = utcnow()
        payslip["payslip_id"] = self.id_service.generate_payslip_id(now.year)
        payslip["created_at"] = now
        payslip["updated_at"] = now

        stored = self.payslip_repository.insert(payslip)
        logger.info(f"Payslip {stored['payslip_id']} generated for employee {employee.employee_id}")
        return stored

    def get_payslip(self, payslip_id: str) -> Dict:
        """
        Raises:
            NotFoundError: If no payslip has this id
        """
        payslip = self.payslip_repository.find_by_payslip_id(payslip_id)
        if payslip is None:
            raise NotFoundError("Payslip not found")
        return payslip

    def get_payslips_by_employee(self, employee_id: str) -> List[Dict]:
        return self.payslip_repository.find_by_employee(employee_id)

    def list_payslips(self, period: Optional[str] = None, employee_id: Optional[str] = None,
                      status: Optional[str] = None) -> List[Dict]:
        """
        Payslips filtered by period, employee and status, newest first.

        Raises:
            ValidationError: If status is not a known payslip status
        """
        if status is not None and status not in PAYSLIP_STATUSES:
            raise ValidationError(f"Invalid payslip status: {status}")
        return self.payslip_repository.find({
            "period": period,
            "employee_id": employee_id,
            "status": status
        })

    def update_payslip_status(self, payslip_id: str, status: str, payment_id: Optional[str] = None) -> Dict:
        """
        Returns:
            Dict: The payslip after the update

        Raises:
            ValidationError: If status is not a known payslip status
            NotFoundError: If no payslip has this id
        """
        if status not in PAYSLIP_STATUSES:
            raise ValidationError(f"Invalid payslip status: {status}")

        payslip = self.get_payslip(payslip_id)
        if not self.payslip_repository.update_status(payslip["payslip_id"], status, payment_id):
            raise NotFoundError("Payslip not found")

        logger.info(f"Payslip {payslip['payslip_id']} marked {status}")
        return self.get_payslip(payslip["payslip_id"])
