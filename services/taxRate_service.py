# ------------------------------------------------------------
# services/taxRate_service.py
# ------------------------------------------------------------
"""
Tax-rate configuration management.

Administrators create and edit configurations here. Every write is
validated first, so bracket schedules in the database always start at zero
and tile income space without gaps or overlaps.
"""
import logging
from typing import Dict, List, Optional

from models.taxRate_model import TaxRateConfiguration
from utils.defense.validation_utils import validate_tax_rate_data
from utils.error_utils import NotFoundError, ValidationError
from utils.time_utils import utcnow

logger = logging.getLogger(__name__)

class TaxRateService:
    """Service for listing, creating and updating tax-rate configurations."""

    def __init__(self, tax_rate_repository):
        self.tax_rate_repository = tax_rate_repository

    def list_tax_rates(self, country_code: Optional[str] = None,
                       is_active: Optional[bool] = None) -> List[TaxRateConfiguration]:
        return self.tax_rate_repository.list(country_code=country_code, is_active=is_active)

    def get_tax_rate(self, tax_rate_id: str) -> TaxRateConfiguration:
        """
        Raises:
            NotFoundError: If no configuration has this id
        """
        config = self.tax_rate_repository.get_by_id(tax_rate_id)
        if config is None:
            raise NotFoundError("Tax rate not found")
        return config

    def create_tax_rate(self, data: Dict) -> TaxRateConfiguration:
        """
        Validate and store a new configuration.

        Defaults: active, effective from now, no other deductions, zero
        social-security and employer rates.

        Raises:
            ValidationError: If the payload is invalid
        """
        validated = validate_tax_rate_data(data)
        validated.setdefault('is_active', True)
        if validated.get('effective_date') is None:
            validated['effective_date'] = utcnow()
            expiry_date = validated.get('expiry_date')
            if expiry_date is not None and expiry_date <= validated['effective_date']:
                raise ValidationError("expiry_date must be after effective_date")

        for key in ('id', '_id', 'created_at', 'updated_at'):
            validated.pop(key, None)

        config = TaxRateConfiguration.from_document(validated)
        created = self.tax_rate_repository.create(config)
        logger.info(f"Tax rate '{created.name}' created for {created.country_code}/{created.region_code or '-'}")
        return created

    def update_tax_rate(self, tax_rate_id: str, updates: Dict) -> TaxRateConfiguration:
        """
        Merge updates into the stored configuration, re-validate and save.

        Raises:
            NotFoundError: If no configuration has this id
            ValidationError: If the merged configuration is invalid
        """
        current = self.get_tax_rate(tax_rate_id)

        merged = current.to_document()
        for key, value in updates.items():
            if key in ('id', '_id', 'created_at', 'updated_at'):
                continue
            merged[key] = value

        validated = validate_tax_rate_data(merged)
        if validated.get('effective_date') is None:
            validated['effective_date'] = current.effective_date
        validated['created_at'] = current.created_at

        config = TaxRateConfiguration.from_document(validated)
        if not self.tax_rate_repository.update(tax_rate_id, config):
            raise NotFoundError("Tax rate not found")

        logger.info(f"Tax rate {tax_rate_id} updated")
        return self.get_tax_rate(tax_rate_id)
