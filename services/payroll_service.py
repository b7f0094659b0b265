# ------------------------------------------------------------
# services/payroll_service.py
# ------------------------------------------------------------
"""
Payroll batch processing.

A payroll run generates one payslip per active employee. Employees are
processed concurrently and independently: a failure for one employee is
recorded against that employee and the rest of the batch carries on.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime
from typing import Dict, List

from config.payroll_config import PAYROLL_STATUSES
from utils.error_utils import AppError, NotFoundError, ValidationError
from utils.logging import log_event
from utils.time_utils import parse_datetime, utcnow

logger = logging.getLogger(__name__)

UPDATABLE_PAYROLL_FIELDS = ('period', 'date', 'status')

class PayrollService:
    """Service for creating and processing payroll runs."""

    def __init__(self, payroll_repository, employee_repository, payslip_service, id_service, max_workers=8):
        """
        Args:
            payroll_repository: Storage for payroll run documents
            employee_repository: Source of active employees
            payslip_service: PayslipService used for each employee
            id_service: Generator for payroll ids
            max_workers: Upper bound on concurrent payslip generation
        """
        self.payroll_repository = payroll_repository
        self.employee_repository = employee_repository
        self.payslip_service = payslip_service
        self.id_service = id_service
        self.max_workers = max_workers

    def create_payroll(self, period: str, date: datetime) -> Dict:
        """
        Create a pending payroll run covering all active employees.

        Returns:
            Dict: The stored payroll document
        """
        employees = self.employee_repository.find_active()
        total_amount = sum(employee.salary for employee in employees)

        now = utcnow()
        payroll = {
            "payroll_id": self.id_service.generate_payroll_id(now.year),
            "period": period,
            "date": date,
            "employees": len(employees),
            "total_amount": float(total_amount),
            "status": "Pending",
            "created_at": now,
            "updated_at": now
        }
        stored = self.payroll_repository.insert(payroll)
        logger.info(f"Payroll {stored['payroll_id']} created for period {period} with {len(employees)} employees")
        return stored

    def get_payroll(self, payroll_id: str) -> Dict:
        """
        Raises:
            NotFoundError: If no payroll has this id
        """
        payroll = self.payroll_repository.find_by_payroll_id(payroll_id)
        if payroll is None:
            raise NotFoundError("Payroll not found")
        return payroll

    def list_payrolls(self) -> List[Dict]:
        return self.payroll_repository.list()

    def update_payroll(self, payroll_id: str, updates: Dict) -> Dict:
        """
        Change a payroll run's period, date or status.

        Raises:
            NotFoundError: If no payroll has this id
            ValidationError: If a field cannot be changed or a value is invalid
        """
        payroll = self.get_payroll(payroll_id)

        unknown = sorted(set(updates) - set(UPDATABLE_PAYROLL_FIELDS))
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(unknown)}")
        if not updates:
            raise ValidationError("No fields to update")

        fields = {}
        if 'period' in updates:
            if not updates['period'] or not isinstance(updates['period'], str):
                raise ValidationError("period must be a non-empty string")
            fields['period'] = updates['period']
        if 'date' in updates:
            try:
                fields['date'] = parse_datetime(updates['date'])
            except (ValueError, TypeError) as e:
                raise ValidationError(f"Invalid date: {str(e)}")
            if fields['date'] is None:
                raise ValidationError("date must not be empty")
        if 'status' in updates:
            if updates['status'] not in PAYROLL_STATUSES:
                raise ValidationError(f"Invalid payroll status: {updates['status']}")
            fields['status'] = updates['status']

        updated = self.payroll_repository.update(payroll["payroll_id"], fields)
        if updated is None:
            raise NotFoundError("Payroll not found")
        logger.info(f"Payroll {payroll['payroll_id']} updated: {', '.join(sorted(fields))}")
        return updated

    def delete_payroll(self, payroll_id: str) -> None:
        """
        Delete a payroll run. Payslips already generated for it are kept.

        Raises:
            NotFoundError: If no payroll has this id
            ValidationError: If the run is being processed
        """
        payroll = self.get_payroll(payroll_id)
        if payroll.get("status") == "Processing":
            raise ValidationError("A payroll cannot be deleted while it is being processed")

        if not self.payroll_repository.delete(payroll["payroll_id"]):
            raise NotFoundError("Payroll not found")
        logger.info(f"Payroll {payroll['payroll_id']} deleted")

    def _process_employee(self, employee, payroll) -> Dict:
        """Generate one employee's payslip, converting any failure into a result entry."""
        try:
            payslip = self.payslip_service.create_payslip(employee, payroll["period"], payroll["date"])
        except AppError as e:
            logger.error(f"Error processing employee {employee.employee_id}: {e.message}")
            return {"employee_id": employee.employee_id, "status": "failed", "error": e.message}
        except Exception as e:
            logger.exception(f"Unexpected error processing employee {employee.employee_id}")
            return {"employee_id": employee.employee_id, "status": "failed", "error": str(e)}

        return {
            "employee_id": employee.employee_id,
            "status": "success",
            "payslip_id": payslip["payslip_id"],
            "amount": payslip["net_amount"],
            "tax_fallback": payslip.get("tax_fallback", False)
        }

    def process_payroll(self, payroll_id: str) -> Dict:
        """
        Generate payslips for every active employee of a payroll run.

        The run ends Completed when every employee succeeded and Failed
        otherwise.

        Returns:
            Dict: payroll_id, final status, per-employee results and a summary

        If the batch cannot run at all, for example because the employee
        list cannot be read, the run is marked Failed and the error is
        re-raised.

        Raises:
            NotFoundError: If no payroll has this id
        """
        payroll = self.get_payroll(payroll_id)
        payroll_id = payroll["payroll_id"]

        self.payroll_repository.update(payroll_id, {"status": "Processing"})
        try:
            employees = self.employee_repository.find_active()

            results = []
            if employees:
                workers = max(1, min(self.max_workers, len(employees)))
                with ThreadPoolExecutor(max_workers=workers) as pool:
                    futures = [
                        pool.submit(self._process_employee, employee, payroll)
                        for employee in employees
                    ]
                    for fut in as_completed(futures):
                        results.append(fut.result())

            results.sort(key=lambda r: r["employee_id"] or "")

            successful = sum(1 for r in results if r["status"] == "success")
            failed = sum(1 for r in results if r["status"] == "failed")
            fallbacks = sum(1 for r in results if r.get("tax_fallback"))

            final_status = "Completed" if failed == 0 else "Failed"
            self.payroll_repository.update(payroll_id, {"status": final_status, "processed_at": utcnow()})
        except Exception as e:
            # Never leave the run stuck in Processing
            logger.error(f"Payroll {payroll_id} aborted: {str(e)}")
            self.payroll_repository.update(payroll_id, {"status": "Failed", "processed_at": utcnow()})
            raise

        summary = {
            "total": len(employees),
            "successful": successful,
            "failed": failed,
            "tax_fallbacks": fallbacks
        }
        log_event("payroll_processed", payroll_id=payroll_id, status=final_status, **summary)

        return {
            "payroll_id": payroll_id,
            "status": final_status,
            "results": results,
            "summary": summary
        }
