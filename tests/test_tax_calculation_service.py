# tests/test_tax_calculation_service.py
import unittest
from datetime import datetime
from decimal import Decimal

from models.employee_model import EmployeeTaxContext
from services.taxCalculation_service import TaxCalculationService
from utils.error_utils import ValidationError, TaxConfigurationNotFoundError
from tests.fakes import InMemoryTaxRateRepository, make_config

AS_OF = datetime(2024, 5, 1)

class TestResolveTaxRate(unittest.TestCase):
    """Jurisdiction lookup"""

    def setUp(self):
        self.country_wide = make_config("US", name="Federal")
        self.california = make_config("US", "CA", name="California")
        self.repository = InMemoryTaxRateRepository([self.country_wide, self.california])
        self.service = TaxCalculationService(self.repository)

    def test_region_configuration_beats_country_wide(self):
        config = self.service.resolve_tax_rate("US", "CA", AS_OF)
        self.assertEqual(config.name, "California")

    def test_unknown_region_falls_back_to_country_wide(self):
        config = self.service.resolve_tax_rate("US", "TX", AS_OF)
        self.assertEqual(config.name, "Federal")
        self.assertEqual(
            [(c, r) for c, r, _ in self.repository.lookups],
            [("US", "TX"), ("US", None)]
        )

    def test_no_region_goes_straight_to_country_wide(self):
        config = self.service.resolve_tax_rate("US", None, AS_OF)
        self.assertEqual(config.name, "Federal")
        self.assertEqual(len(self.repository.lookups), 1)

    def test_missing_country_raises_not_found(self):
        with self.assertRaises(TaxConfigurationNotFoundError) as ctx:
            self.service.resolve_tax_rate("GB", "LDN", AS_OF)
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.code, "TAX_CONFIGURATION_NOT_FOUND")
        self.assertIn("GB, LDN", ctx.exception.message)

    def test_empty_country_code_rejected(self):
        with self.assertRaises(ValidationError):
            self.service.resolve_tax_rate("", "CA", AS_OF)

    def test_expired_configuration_never_selected(self):
        repository = InMemoryTaxRateRepository([
            make_config("IN", expiry_date=datetime(2023, 12, 31), is_active=True)
        ])
        with self.assertRaises(TaxConfigurationNotFoundError):
            TaxCalculationService(repository).resolve_tax_rate("IN", None, AS_OF)

    def test_expiry_date_is_exclusive(self):
        repository = InMemoryTaxRateRepository([make_config("IN", expiry_date=AS_OF)])
        with self.assertRaises(TaxConfigurationNotFoundError):
            TaxCalculationService(repository).resolve_tax_rate("IN", None, AS_OF)

    def test_inactive_configuration_never_selected(self):
        repository = InMemoryTaxRateRepository([make_config("IN", is_active=False)])
        with self.assertRaises(TaxConfigurationNotFoundError):
            TaxCalculationService(repository).resolve_tax_rate("IN", None, AS_OF)

    def test_future_configuration_not_yet_effective(self):
        repository = InMemoryTaxRateRepository([
            make_config("IN", effective_date=datetime(2025, 1, 1))
        ])
        service = TaxCalculationService(repository)
        with self.assertRaises(TaxConfigurationNotFoundError):
            service.resolve_tax_rate("IN", None, AS_OF)
        self.assertEqual(service.resolve_tax_rate("IN", None, datetime(2025, 1, 1)).country_code, "IN")

    def test_expired_region_falls_back_to_country_wide(self):
        repository = InMemoryTaxRateRepository([
            make_config("US", name="Federal"),
            make_config("US", "CA", name="Old California", expiry_date=datetime(2024, 1, 1))
        ])
        config = TaxCalculationService(repository).resolve_tax_rate("US", "CA", AS_OF)
        self.assertEqual(config.name, "Federal")

    def test_latest_effective_date_wins_between_equal_configurations(self):
        repository = InMemoryTaxRateRepository([
            make_config("US", name="2023 rates", effective_date=datetime(2023, 1, 1)),
            make_config("US", name="2024 rates", effective_date=datetime(2024, 1, 1)),
            make_config("US", name="2022 rates", effective_date=datetime(2022, 1, 1))
        ])
        config = TaxCalculationService(repository).resolve_tax_rate("US", None, AS_OF)
        self.assertEqual(config.name, "2024 rates")

    def test_newest_record_wins_when_effective_dates_match(self):
        repository = InMemoryTaxRateRepository([
            make_config("US", name="first", id="65a000000000000000000001"),
            make_config("US", name="second", id="65a000000000000000000002")
        ])
        config = TaxCalculationService(repository).resolve_tax_rate("US", None, AS_OF)
        self.assertEqual(config.name, "second")

class TestCalculateTax(unittest.TestCase):
    """Deduction breakdown"""

    def calculate(self, configs, gross, context=None):
        service = TaxCalculationService(InMemoryTaxRateRepository(configs))
        return service.calculate_tax(context or EmployeeTaxContext("US"), gross, as_of=AS_OF)

    def test_end_to_end_breakdown(self):
        config = make_config(
            "US",
            brackets=[{"min_income": 0, "rate": 20}],
            social_security_rate=6,
            employer_contribution_rate=3
        )
        result = self.calculate([config], 5000)

        self.assertEqual(result.gross_income, Decimal('5000.00'))
        self.assertEqual(result.taxable_income, Decimal('5000.00'))
        self.assertEqual(result.income_tax, Decimal('1000.00'))
        self.assertEqual(result.social_security, Decimal('300.00'))
        self.assertEqual(result.employer_contribution, Decimal('150.00'))
        self.assertEqual(result.total_deductions, Decimal('1300.00'))
        self.assertEqual(result.net_income, Decimal('3700.00'))
        self.assertEqual(result.effective_tax_rate, Decimal('26.00'))
        self.assertEqual(result.currency, "USD")
        self.assertEqual(result.other_deductions, ())

    def test_other_deductions_and_additional_withholding(self):
        config = make_config(
            "US", "CA",
            brackets=[{"min_income": 0, "rate": 10}],
            other_deductions=[
                {"name": "SDI", "type": "percentage", "value": 50, "max_amount": 1000},
                {"name": "Union", "type": "fixed", "value": 25}
            ]
        )
        context = EmployeeTaxContext("US", "CA", Decimal('100'))
        result = self.calculate([config], 10000, context)

        self.assertEqual(result.other_deductions_by_name(), {
            "SDI": Decimal('1000.00'),
            "Union": Decimal('25.00')
        })
        self.assertEqual(result.additional_withholding, Decimal('100.00'))
        self.assertEqual(result.total_deductions, Decimal('2125.00'))
        self.assertEqual(result.net_income, Decimal('7875.00'))
        self.assertIsNotNone(result.tax_rate_id)

    def test_employer_contribution_not_deducted(self):
        config = make_config("US", brackets=[{"min_income": 0, "rate": 0}], employer_contribution_rate=50)
        result = self.calculate([config], 1000)
        self.assertEqual(result.employer_contribution, Decimal('500.00'))
        self.assertEqual(result.net_income, Decimal('1000.00'))

    def test_net_income_may_go_negative(self):
        config = make_config("US", brackets=[{"min_income": 0, "rate": 90}], social_security_rate=20)
        result = self.calculate([config], 1000)
        self.assertEqual(result.net_income, Decimal('-100.00'))

    def test_zero_gross_income(self):
        result = self.calculate([make_config("US")], 0)
        self.assertEqual(result.total_deductions, Decimal('0.00'))
        self.assertEqual(result.net_income, Decimal('0.00'))
        self.assertEqual(result.effective_tax_rate, Decimal('0.00'))

    def test_negative_gross_rejected(self):
        with self.assertRaises(ValidationError):
            self.calculate([make_config("US")], -0.001)

    def test_missing_configuration(self):
        with self.assertRaises(TaxConfigurationNotFoundError):
            self.calculate([make_config("US")], 5000, EmployeeTaxContext("FR"))

    def test_result_serializes_to_numbers(self):
        result = self.calculate([make_config("US")], 5000)
        data = result.to_dict()
        self.assertEqual(data["income_tax"], 500.0)
        self.assertEqual(data["net_income"], 4500.0)
        self.assertEqual(data["other_deductions"], [])

if __name__ == '__main__':
    unittest.main()
