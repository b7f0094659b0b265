# ------------------------------------------------------------
# repositories/payslip_repository.py
# ------------------------------------------------------------
"""
Payslip and payroll repositories implementing the repository pattern.
"""
from typing import Dict, Optional, List
import logging
from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from config import Config
from utils.database_utils import safe_object_id
from utils.error_utils import DatabaseError
from utils.time_utils import utcnow

logger = logging.getLogger(__name__)

class PayslipRepository:
    """Repository for payslip documents."""

    def __init__(self, db: Database, collection_name: str = None):
        self.db = db
        self.collection = db[collection_name or Config.COLLECTION_PAYSLIPS]

    def insert(self, payslip: Dict) -> Dict:
        """
        Insert a payslip document.

        Returns:
            Dict: The stored document including its _id
        """
        doc = dict(payslip)
        try:
            result = self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error(f"Error inserting payslip {payslip.get('payslip_id')}: {str(e)}")
            raise DatabaseError("Failed to save payslip") from e
        doc["_id"] = result.inserted_id
        return doc

    def find_by_payslip_id(self, payslip_id: str) -> Optional[Dict]:
        """
        Find a payslip by payslip ID, falling back to the MongoDB _id.
        """
        try:
            doc = self.collection.find_one({"payslip_id": payslip_id})
            if doc is None:
                obj_id = safe_object_id(payslip_id)
                if obj_id is not None:
                    doc = self.collection.find_one({"_id": obj_id})
            return doc
        except PyMongoError as e:
            logger.error(f"Error finding payslip {payslip_id}: {str(e)}")
            raise DatabaseError("Failed to load payslip") from e

    def find(self, filters: Optional[Dict] = None) -> List[Dict]:
        """
        Payslips matching the given fields, newest first.

        Args:
            filters: Exact-match fields such as period, employee_id or status
        """
        query = {k: v for k, v in (filters or {}).items() if v is not None}
        try:
            return list(self.collection.find(query).sort("date", DESCENDING))
        except PyMongoError as e:
            logger.error(f"Error listing payslips: {str(e)}")
            raise DatabaseError("Failed to list payslips") from e

    def find_by_employee(self, employee_id: str) -> List[Dict]:
        """Payslips for one employee, newest first."""
        try:
            return list(self.collection.find({"employee_id": employee_id}).sort("date", DESCENDING))
        except PyMongoError as e:
            logger.error(f"Error listing payslips for {employee_id}: {str(e)}")
            raise DatabaseError("Failed to list payslips") from e

    def update_status(self, payslip_id: str, status: str, payment_id: Optional[str] = None) -> bool:
        """
        Set a payslip's status (and payment reference when given).

        Returns:
            bool: True if a payslip has this id
        """
        update_data = {"status": status, "updated_at": utcnow()}
        if payment_id:
            update_data["payment_id"] = payment_id

        try:
            result = self.collection.update_one({"payslip_id": payslip_id}, {"$set": update_data})
        except PyMongoError as e:
            logger.error(f"Error updating payslip {payslip_id}: {str(e)}")
            raise DatabaseError("Failed to update payslip") from e
        return result.matched_count > 0

class PayrollRepository:
    """Repository for payroll run documents."""

    def __init__(self, db: Database, collection_name: str = None):
        self.db = db
        self.collection = db[collection_name or Config.COLLECTION_PAYROLLS]

    def insert(self, payroll: Dict) -> Dict:
        doc = dict(payroll)
        try:
            result = self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error(f"Error inserting payroll {payroll.get('payroll_id')}: {str(e)}")
            raise DatabaseError("Failed to save payroll") from e
        doc["_id"] = result.inserted_id
        return doc

    def find_by_payroll_id(self, payroll_id: str) -> Optional[Dict]:
        """
        Find a payroll by payroll ID, falling back to the MongoDB _id.
        """
        try:
            doc = self.collection.find_one({"payroll_id": payroll_id})
            if doc is None:
                obj_id = safe_object_id(payroll_id)
                if obj_id is not None:
                    doc = self.collection.find_one({"_id": obj_id})
            return doc
        except PyMongoError as e:
            logger.error(f"Error finding payroll {payroll_id}: {str(e)}")
            raise DatabaseError("Failed to load payroll") from e

    def list(self) -> List[Dict]:
        """All payroll runs, newest first."""
        try:
            return list(self.collection.find({}).sort("created_at", DESCENDING))
        except PyMongoError as e:
            logger.error(f"Error listing payrolls: {str(e)}")
            raise DatabaseError("Failed to list payrolls") from e

    def update(self, payroll_id: str, fields: Dict) -> Optional[Dict]:
        """
        Set fields on a payroll, stamping updated_at.

        Returns:
            Dict: The updated document, or None if no payroll has this id
        """
        update_data = dict(fields)
        update_data["updated_at"] = utcnow()
        try:
            return self.collection.find_one_and_update(
                {"payroll_id": payroll_id},
                {"$set": update_data},
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            logger.error(f"Error updating payroll {payroll_id}: {str(e)}")
            raise DatabaseError("Failed to update payroll") from e

    def delete(self, payroll_id: str) -> bool:
        """
        Delete a payroll by payroll ID, falling back to the MongoDB _id.

        Returns:
            bool: True if a document was deleted
        """
        try:
            result = self.collection.delete_one({"payroll_id": payroll_id})
            if result.deleted_count == 0:
                obj_id = safe_object_id(payroll_id)
                if obj_id is not None:
                    result = self.collection.delete_one({"_id": obj_id})
        except PyMongoError as e:
            logger.error(f"Error deleting payroll {payroll_id}: {str(e)}")
            raise DatabaseError("Failed to delete payroll") from e
        return result.deleted_count > 0
