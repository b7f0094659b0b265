# ------------------------------------------------------------
# repositories/taxRate_repository.py
# ------------------------------------------------------------
"""
Tax-rate repository implementing the repository pattern.
Provides data access for tax-rate configurations stored in MongoDB.
"""
from typing import Dict, Optional, List
import logging
from datetime import datetime
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from config import Config
from models.taxRate_model import TaxRateConfiguration
from utils.database_utils import safe_object_id
from utils.error_utils import DatabaseError
from utils.time_utils import utcnow

logger = logging.getLogger(__name__)

# Equally specific configurations valid at the same instant: the latest
# effective_date wins, then the most recently inserted document.
APPLICABLE_SORT = [("effective_date", DESCENDING), ("_id", DESCENDING)]

# Optional fields removed from the stored document when cleared
_CLEARABLE_FIELDS = ("region_code", "description", "expiry_date")

class TaxRateRepository:
    """
    Repository for tax-rate configuration data access.

    Features:
    - Applicable-configuration lookup with active/date-window filtering
    - Listing with country and status filters
    - Create and update for configuration management
    """

    def __init__(self, db: Database, collection_name: str = None):
        """
        Initialize the Tax Rate Repository.

        Args:
            db: MongoDB database instance
            collection_name: Override for the tax rates collection name
        """
        self.db = db
        self.collection = db[collection_name or Config.COLLECTION_TAX_RATES]

    @staticmethod
    def build_applicable_query(country_code: str, region_code: Optional[str], as_of: datetime) -> Dict:
        """
        Build the filter for configurations valid at as_of.

        A region_code of None restricts the match to country-wide
        configurations (documents without a region_code).
        """
        return {
            "country_code": country_code,
            "region_code": region_code if region_code else None,
            "is_active": True,
            "effective_date": {"$lte": as_of},
            "$or": [
                {"expiry_date": {"$exists": False}},
                {"expiry_date": None},
                {"expiry_date": {"$gt": as_of}}
            ]
        }

    def find_applicable(self, country_code: str, region_code: Optional[str], as_of: datetime) -> Optional[TaxRateConfiguration]:
        """
        Find the configuration valid for exactly this jurisdiction level at as_of.

        Args:
            country_code: Country code
            region_code: Region code, or None for the country-wide configuration
            as_of: Evaluation time

        Returns:
            TaxRateConfiguration: The winning configuration or None
        """
        query = self.build_applicable_query(country_code, region_code, as_of)
        try:
            doc = self.collection.find_one(query, sort=APPLICABLE_SORT)
        except PyMongoError as e:
            logger.error(f"Error finding tax rate for {country_code}/{region_code or '-'}: {str(e)}")
            raise DatabaseError("Failed to look up tax rate configuration") from e

        return TaxRateConfiguration.from_document(doc) if doc else None

    def list(self, country_code: Optional[str] = None, is_active: Optional[bool] = None) -> List[TaxRateConfiguration]:
        """
        List configurations, optionally filtered by country and status.

        Returns:
            List[TaxRateConfiguration]: Sorted by country code, then region code
        """
        query = {}
        if country_code:
            query["country_code"] = country_code
        if is_active is not None:
            query["is_active"] = is_active

        try:
            cursor = self.collection.find(query).sort([("country_code", ASCENDING), ("region_code", ASCENDING)])
            return [TaxRateConfiguration.from_document(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error(f"Error listing tax rates: {str(e)}")
            raise DatabaseError("Failed to list tax rate configurations") from e

    def get_by_id(self, tax_rate_id: str) -> Optional[TaxRateConfiguration]:
        """
        Find a configuration by MongoDB ID.

        Returns:
            TaxRateConfiguration: The configuration, or None if the id is unknown or malformed
        """
        obj_id = safe_object_id(tax_rate_id)
        if obj_id is None:
            return None

        try:
            doc = self.collection.find_one({"_id": obj_id})
        except PyMongoError as e:
            logger.error(f"Error finding tax rate by ID: {str(e)}")
            raise DatabaseError("Failed to load tax rate configuration") from e

        return TaxRateConfiguration.from_document(doc) if doc else None

    def create(self, config: TaxRateConfiguration) -> TaxRateConfiguration:
        """
        Insert a new configuration, stamping created_at and updated_at.

        Returns:
            TaxRateConfiguration: The stored configuration including its id
        """
        now = utcnow()
        doc = config.to_document()
        doc["created_at"] = now
        doc["updated_at"] = now

        try:
            result = self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error(f"Error creating tax rate: {str(e)}")
            raise DatabaseError("Failed to create tax rate configuration") from e

        doc["_id"] = result.inserted_id
        logger.info(f"Created tax rate {result.inserted_id} for {config.country_code}/{config.region_code or '-'}")
        return TaxRateConfiguration.from_document(doc)

    def update(self, tax_rate_id: str, config: TaxRateConfiguration) -> bool:
        """
        Overwrite a stored configuration with new values, stamping updated_at.

        Returns:
            bool: True if a document with this id existed
        """
        obj_id = safe_object_id(tax_rate_id)
        if obj_id is None:
            return False

        doc = config.to_document()
        doc.pop("created_at", None)
        doc["updated_at"] = utcnow()

        update = {"$set": doc}
        cleared = {name: "" for name in _CLEARABLE_FIELDS if name not in doc}
        if cleared:
            update["$unset"] = cleared

        try:
            result = self.collection.update_one({"_id": obj_id}, update)
        except PyMongoError as e:
            logger.error(f"Error updating tax rate {tax_rate_id}: {str(e)}")
            raise DatabaseError("Failed to update tax rate configuration") from e

        return result.matched_count > 0
