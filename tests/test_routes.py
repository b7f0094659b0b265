# tests/test_routes.py
import unittest

from app_setup import create_app
from config import Config
from tests.fakes import build_repositories, make_config, make_employee

class RouteTestConfig(Config):
    TESTING = True
    LOG_LEVEL = 'WARNING'

class RouteTestCase(unittest.TestCase):

    def setUp(self):
        self.repositories = build_repositories(
            configs=[
                make_config("US", name="Federal", brackets=[{"min_income": 0, "rate": 20}],
                            social_security_rate=6, employer_contribution_rate=3),
                make_config("US", "CA", name="California")
            ],
            employees=[
                make_employee("EMP-0001", salary=5000),
                make_employee("EMP-0002", salary=4000, country_code="US", region_code="CA"),
                make_employee("EMP-0003", salary=3000, country_code="FR")
            ]
        )
        self.app = create_app(RouteTestConfig, repositories=self.repositories)
        self.client = self.app.test_client()

class TestTaxRateRoutes(RouteTestCase):
    """Configuration management and the calculation preview"""

    def test_list_tax_rates(self):
        response = self.client.get('/api/tax-rates?country_code=US')
        self.assertEqual(response.status_code, 200)
        names = [rate["name"] for rate in response.get_json()["tax_rates"]]
        self.assertEqual(sorted(names), ["California", "Federal"])

    def test_list_rejects_bad_boolean(self):
        response = self.client.get('/api/tax-rates?is_active=maybe')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["code"], "VALIDATION_ERROR")

    def test_create_tax_rate(self):
        response = self.client.post('/api/tax-rates', json={
            "country_code": "IN",
            "region_code": "MH",
            "name": "Maharashtra",
            "currency": "INR",
            "income_tax_brackets": [
                {"min_income": 0, "max_income": 250000, "rate": 0},
                {"min_income": 250000, "rate": 5}
            ],
            "effective_date": "2024-04-01"
        })
        self.assertEqual(response.status_code, 201)
        tax_rate = response.get_json()["tax_rate"]
        self.assertTrue(tax_rate["is_active"])
        self.assertEqual(tax_rate["effective_date"], "2024-04-01T00:00:00")
        self.assertIsNotNone(tax_rate["id"])

    def test_create_inactive_tax_rate_from_string_flag(self):
        response = self.client.post('/api/tax-rates', json={
            "country_code": "FR",
            "name": "France",
            "currency": "EUR",
            "income_tax_brackets": [{"min_income": 0, "rate": 30}],
            "effective_date": "2024-01-01",
            "is_active": "false"
        })
        self.assertEqual(response.status_code, 201)
        self.assertFalse(response.get_json()["tax_rate"]["is_active"])

        response = self.client.post('/api/tax-rates/calculate', json={
            "gross_income": 5000,
            "location": {"country_code": "FR"}
        })
        self.assertEqual(response.status_code, 404)

    def test_create_with_missing_fields(self):
        response = self.client.post('/api/tax-rates', json={"country_code": "IN"})
        self.assertEqual(response.status_code, 400)
        self.assertIn("Missing required fields", response.get_json()["message"])

    def test_create_with_gapped_brackets(self):
        response = self.client.post('/api/tax-rates', json={
            "country_code": "IN",
            "name": "Broken",
            "currency": "INR",
            "income_tax_brackets": [
                {"min_income": 0, "max_income": 1000, "rate": 0},
                {"min_income": 5000, "rate": 5}
            ]
        })
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["code"], "VALIDATION_ERROR")

    def test_get_and_update_tax_rate(self):
        tax_rate_id = self.repositories["tax_rate_repository"].list(country_code="US")[0].id

        response = self.client.get(f'/api/tax-rates/{tax_rate_id}')
        self.assertEqual(response.status_code, 200)

        response = self.client.put(f'/api/tax-rates/{tax_rate_id}', json={"social_security_rate": 7.5})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["tax_rate"]["social_security_rate"], 7.5)

    def test_unknown_tax_rate(self):
        response = self.client.get('/api/tax-rates/65a000000000000000000000')
        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.get_json()["success"])

    def test_calculate_for_location(self):
        response = self.client.post('/api/tax-rates/calculate', json={
            "gross_income": 5000,
            "location": {"country_code": "US", "region_code": "TX"}
        })
        self.assertEqual(response.status_code, 200)
        calculation = response.get_json()["calculation"]
        self.assertEqual(calculation["income_tax"], 1000.0)
        self.assertEqual(calculation["social_security"], 300.0)
        self.assertEqual(calculation["employer_contribution"], 150.0)
        self.assertEqual(calculation["net_income"], 3700.0)
        self.assertEqual(calculation["effective_tax_rate"], 26.0)

    def test_calculate_for_employee_uses_region(self):
        response = self.client.post('/api/tax-rates/calculate', json={
            "gross_income": 15000,
            "employee_id": "EMP-0002"
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["calculation"]["income_tax"], 2000.0)

    def test_calculate_without_configuration(self):
        response = self.client.post('/api/tax-rates/calculate', json={
            "gross_income": 5000,
            "location": {"country_code": "FR"}
        })
        self.assertEqual(response.status_code, 404)
        body = response.get_json()
        self.assertEqual(body["code"], "TAX_CONFIGURATION_NOT_FOUND")
        self.assertEqual(body["details"]["country_code"], "FR")

    def test_calculate_rejects_negative_income(self):
        response = self.client.post('/api/tax-rates/calculate', json={
            "gross_income": -10,
            "location": {"country_code": "US"}
        })
        self.assertEqual(response.status_code, 400)

    def test_calculate_before_any_configuration_was_effective(self):
        response = self.client.post('/api/tax-rates/calculate', json={
            "gross_income": 5000,
            "location": {"country_code": "US"},
            "as_of": "2019-06-01"
        })
        self.assertEqual(response.status_code, 404)

class TestPayrollRoutes(RouteTestCase):
    """Payroll runs and payslips over HTTP"""

    def test_payroll_lifecycle(self):
        response = self.client.post('/api/payroll', json={"period": "2024-05", "date": "2024-05-31"})
        self.assertEqual(response.status_code, 201)
        payroll = response.get_json()["payroll"]
        self.assertEqual(payroll["status"], "Pending")
        self.assertEqual(payroll["employees"], 3)
        self.assertEqual(payroll["date"], "2024-05-31T00:00:00")

        response = self.client.post(f'/api/payroll/{payroll["payroll_id"]}/process')
        self.assertEqual(response.status_code, 200)
        outcome = response.get_json()
        self.assertTrue(outcome["success"])
        self.assertEqual(outcome["status"], "Completed")
        self.assertEqual(outcome["summary"]["tax_fallbacks"], 1)

        response = self.client.get(f'/api/payroll/{payroll["payroll_id"]}')
        self.assertEqual(response.get_json()["payroll"]["status"], "Completed")

        response = self.client.get('/api/payroll')
        self.assertEqual(len(response.get_json()["payrolls"]), 1)

    def test_process_unknown_payroll(self):
        response = self.client.post('/api/payroll/PAY-1999-001/process')
        self.assertEqual(response.status_code, 404)

    def test_create_payroll_with_bad_date(self):
        response = self.client.post('/api/payroll', json={"period": "2024-05", "date": "end of May"})
        self.assertEqual(response.status_code, 400)

    def test_payslip_endpoints(self):
        response = self.client.post('/api/payslips', json={"employee_id": "EMP-0001", "period": "2024-05"})
        self.assertEqual(response.status_code, 201)
        payslip = response.get_json()["payslip"]
        self.assertEqual(payslip["net_amount"], 3700.0)
        self.assertIn("id", payslip)

        response = self.client.get(f'/api/payslips/{payslip["payslip_id"]}')
        self.assertEqual(response.status_code, 200)

        response = self.client.get('/api/payslips/employee/EMP-0001')
        self.assertEqual([p["payslip_id"] for p in response.get_json()["payslips"]], [payslip["payslip_id"]])

    def test_payslip_for_unknown_employee(self):
        response = self.client.post('/api/payslips', json={"employee_id": "EMP-9999", "period": "2024-05"})
        self.assertEqual(response.status_code, 404)

    def test_update_and_delete_payroll(self):
        payroll_id = self.client.post('/api/payroll', json={"period": "2024-05"}).get_json()["payroll"]["payroll_id"]

        response = self.client.put(f'/api/payroll/{payroll_id}', json={"period": "2024-06", "date": "2024-06-30"})
        self.assertEqual(response.status_code, 200)
        payroll = response.get_json()["payroll"]
        self.assertEqual(payroll["period"], "2024-06")
        self.assertEqual(payroll["date"], "2024-06-30T00:00:00")

        response = self.client.put(f'/api/payroll/{payroll_id}', json={"status": "Archived"})
        self.assertEqual(response.status_code, 400)

        response = self.client.delete(f'/api/payroll/{payroll_id}')
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()["success"])

        self.assertEqual(self.client.get(f'/api/payroll/{payroll_id}').status_code, 404)
        self.assertEqual(self.client.delete(f'/api/payroll/{payroll_id}').status_code, 404)

    def test_update_payroll_without_body(self):
        payroll_id = self.client.post('/api/payroll', json={"period": "2024-05"}).get_json()["payroll"]["payroll_id"]
        response = self.client.put(f'/api/payroll/{payroll_id}', json={})
        self.assertEqual(response.status_code, 400)

    def test_list_and_update_payslips(self):
        payroll_id = self.client.post('/api/payroll', json={"period": "2024-05", "date": "2024-05-31"}).get_json()["payroll"]["payroll_id"]
        self.client.post(f'/api/payroll/{payroll_id}/process')
        self.client.post('/api/payslips', json={"employee_id": "EMP-0001", "period": "2024-04", "date": "2024-04-30"})

        response = self.client.get('/api/payslips?period=2024-05')
        self.assertEqual(response.status_code, 200)
        may = response.get_json()["payslips"]
        self.assertEqual(sorted(p["employee_id"] for p in may), ["EMP-0001", "EMP-0002", "EMP-0003"])

        response = self.client.get('/api/payslips?employee_id=EMP-0001')
        self.assertEqual([p["period"] for p in response.get_json()["payslips"]], ["2024-05", "2024-04"])

        payslip_id = [p for p in may if p["employee_id"] == "EMP-0002"][0]["payslip_id"]
        response = self.client.put(f'/api/payslips/{payslip_id}', json={"status": "Paid", "payment_id": "TXN-42"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["payslip"]["payment_id"], "TXN-42")

        response = self.client.get('/api/payslips?status=Paid&period=2024-05')
        self.assertEqual([p["payslip_id"] for p in response.get_json()["payslips"]], [payslip_id])

    def test_payslip_update_validation(self):
        payslip_id = self.client.post('/api/payslips', json={"employee_id": "EMP-0001", "period": "2024-05"}).get_json()["payslip"]["payslip_id"]

        self.assertEqual(self.client.put(f'/api/payslips/{payslip_id}', json={"status": "Lost"}).status_code, 400)
        self.assertEqual(self.client.put(f'/api/payslips/{payslip_id}', json={"payment_id": "TXN-1"}).status_code, 400)
        self.assertEqual(self.client.put('/api/payslips/PS-1999-0001', json={"status": "Paid"}).status_code, 404)
        self.assertEqual(self.client.get('/api/payslips?status=Lost').status_code, 400)

    def test_unknown_route_uses_json_envelope(self):
        response = self.client.get('/api/nothing-here')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["code"], "NOT_FOUND")

if __name__ == '__main__':
    unittest.main()
