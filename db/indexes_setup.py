# ------------------------------------------------------------
# db/indexes_setup.py
# ------------------------------------------------------------
"""
Database index setup script for MongoDB collections.
Creates the indexes used by tax-rate lookup and payroll processing.
"""
import logging
from pymongo import ASCENDING, DESCENDING

from config import Config

logger = logging.getLogger(__name__)

def handle_index_conflict(collection, index_specs, **kwargs):
    """
    Handle potential index conflicts by dropping existing indexes and recreating them.

    Args:
        collection: MongoDB collection
        index_specs: List of tuples defining index fields
        **kwargs: Additional arguments for create_index

    Returns:
        Result of create_index operation
    """
    try:
        return collection.create_index(index_specs, **kwargs)
    except Exception as e:
        # Only index conflicts are recoverable
        if "Index already exists with a different name" not in str(e):
            raise

        existing_indexes = collection.index_information()

        # Find the conflicting index by comparing key patterns
        target_fields = [f for f, _ in index_specs]
        for idx_name, idx_info in existing_indexes.items():
            if idx_name == '_id_':
                continue

            # Compare field names (ignoring sort direction)
            idx_fields = [f for f, _ in idx_info.get('key', [])]
            if set(idx_fields) == set(target_fields):
                logger.info(f"Dropping conflicting index '{idx_name}' in {collection.name}")
                collection.drop_index(idx_name)
                break

        logger.info(f"Recreating index in {collection.name}")
        return collection.create_index(index_specs, **kwargs)

def setup_tax_rate_indexes(db):
    """
    Set up indexes for the tax rates collection.

    Args:
        db: MongoDB database instance
    """
    tax_rates = db[Config.COLLECTION_TAX_RATES]
    logger.info(f"Setting up indexes for {tax_rates.name} collection...")
    handle_index_conflict(
        tax_rates,
        [("country_code", ASCENDING), ("region_code", ASCENDING), ("is_active", ASCENDING), ("effective_date", DESCENDING)],
        name="idx_tax_rates_jurisdiction"
    )
    handle_index_conflict(tax_rates, [("expiry_date", ASCENDING)], name="idx_tax_rates_expiry_date")

def setup_payroll_indexes(db):
    """
    Set up indexes for employees, payslips, payrolls and id counters.

    Args:
        db: MongoDB database instance
    """
    employees = db[Config.COLLECTION_EMPLOYEES]
    logger.info(f"Setting up indexes for {employees.name} collection...")
    handle_index_conflict(employees, [("employee_id", ASCENDING)], unique=True, name="idx_employees_employee_id")
    handle_index_conflict(employees, [("status", ASCENDING), ("name", ASCENDING)], name="idx_employees_status_name")

    payslips = db[Config.COLLECTION_PAYSLIPS]
    logger.info(f"Setting up indexes for {payslips.name} collection...")
    handle_index_conflict(payslips, [("payslip_id", ASCENDING)], unique=True, name="idx_payslips_payslip_id")
    handle_index_conflict(payslips, [("employee_id", ASCENDING), ("date", DESCENDING)], name="idx_payslips_employee_date")

    payrolls = db[Config.COLLECTION_PAYROLLS]
    logger.info(f"Setting up indexes for {payrolls.name} collection...")
    handle_index_conflict(payrolls, [("payroll_id", ASCENDING)], unique=True, name="idx_payrolls_payroll_id")
    handle_index_conflict(payrolls, [("created_at", DESCENDING)], name="idx_payrolls_created_at")

def setup_all_indexes(db):
    """
    Set up all indexes for the application.

    Args:
        db: MongoDB database instance
    """
    try:
        setup_tax_rate_indexes(db)
        setup_payroll_indexes(db)
        logger.info("All indexes created successfully")
    except Exception as e:
        logger.error(f"Error setting up indexes: {str(e)}")
        raise
