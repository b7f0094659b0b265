# ------------------------------------------------------------
# repositories/employee_repository.py
# ------------------------------------------------------------
"""
Employee repository implementing the repository pattern.
Read-only access to the employee records payroll runs over.
"""
from typing import Optional, List
import logging
from pymongo import ASCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from config import Config
from models.employee_model import Employee
from utils.error_utils import DatabaseError

logger = logging.getLogger(__name__)

class EmployeeRepository:
    """Repository for employee lookups."""

    def __init__(self, db: Database, collection_name: str = None):
        self.db = db
        self.collection = db[collection_name or Config.COLLECTION_EMPLOYEES]

    def find_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        """
        Find an employee by employee ID (e.g. EMP-0001).

        Returns:
            Employee: The employee or None if not found
        """
        try:
            doc = self.collection.find_one({"employee_id": employee_id})
        except PyMongoError as e:
            logger.error(f"Error finding employee {employee_id}: {str(e)}")
            raise DatabaseError("Failed to load employee") from e
        return Employee.from_document(doc) if doc else None

    def find_active(self) -> List[Employee]:
        """
        All employees with status Active, sorted by name.
        """
        try:
            cursor = self.collection.find({"status": "Active"}).sort("name", ASCENDING)
            return [Employee.from_document(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error(f"Error listing active employees: {str(e)}")
            raise DatabaseError("Failed to list employees") from e
