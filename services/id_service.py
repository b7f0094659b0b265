"""
ID Service for generating unique payroll document identifiers.
Provides consistent ID formats backed by atomic counters in MongoDB.
"""
import logging
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from config.payroll_config import PAYSLIP_ID_PREFIX, PAYROLL_ID_PREFIX
from utils.error_utils import DatabaseError

logger = logging.getLogger(__name__)

class IDService:
    """
    Service for generating payslip and payroll identifiers.

    Sequences are kept per prefix and year in the id_counters collection and
    advanced with a single find_one_and_update, so concurrent payslip
    generation never hands out the same number twice.
    """

    def __init__(self, db, collection_name='id_counters'):
        """
        Initialize the ID Service with a database connection.

        Args:
            db: MongoDB database instance
            collection_name: Name of the counters collection
        """
        self.db = db
        self.counters = db[collection_name]

    def _get_next_sequence(self, counter_name: str) -> int:
        """
        Atomically increment and return the sequence for counter_name.

        Raises:
            DatabaseError: If the counter cannot be advanced
        """
        try:
            counter_doc = self.counters.find_one_and_update(
                {'_id': counter_name},
                {'$inc': {'sequence': 1}},
                upsert=True,
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            logger.error(f"Error generating sequence for {counter_name}: {str(e)}")
            raise DatabaseError(f"Failed to generate identifier for {counter_name}") from e

        return counter_doc['sequence']

    def generate_payslip_id(self, year: int) -> str:
        """
        Generate a payslip ID.
        Format: 'PS-YYYY-NNNN'
        """
        sequence = self._get_next_sequence(f"{PAYSLIP_ID_PREFIX}-{year}")
        return f"{PAYSLIP_ID_PREFIX}-{year}-{sequence:04d}"

    def generate_payroll_id(self, year: int) -> str:
        """
        Generate a payroll run ID.
        Format: 'PAY-YYYY-NNN'
        """
        sequence = self._get_next_sequence(f"{PAYROLL_ID_PREFIX}-{year}")
        return f"{PAYROLL_ID_PREFIX}-{year}-{sequence:03d}"
