# ------------------------------------------------------------
# config/base_config.py
# ------------------------------------------------------------
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

class Config:
    """Base configuration class for the payroll tax service."""

    # MongoDB Configuration
    MONGO_URI = os.getenv('MONGO_URI', 'mongodb://localhost:27017')
    MONGO_DBNAME = os.getenv('MONGO_DBNAME', 'payroll_db')
    MONGO_SERVER_SELECTION_TIMEOUT = int(os.getenv('MONGO_SERVER_SELECTION_TIMEOUT', 10000))

    # MongoDB Collection Names
    COLLECTION_TAX_RATES = os.getenv('COLLECTION_TAX_RATES', 'tax_rates')
    COLLECTION_EMPLOYEES = os.getenv('COLLECTION_EMPLOYEES', 'employees')
    COLLECTION_PAYSLIPS = os.getenv('COLLECTION_PAYSLIPS', 'payslips')
    COLLECTION_PAYROLLS = os.getenv('COLLECTION_PAYROLLS', 'payrolls')

    # Application Configuration
    SECRET_KEY = os.getenv('SECRET_KEY', 'a_secure_random_key')
    HOST = os.getenv('FLASK_HOST', '0.0.0.0')
    PORT = int(os.getenv('FLASK_PORT', 5000))
    DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    TESTING = False

    # CORS Configuration
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*').split(',')
    CORS_METHODS = ['GET', 'POST', 'PUT', 'OPTIONS']
    CORS_ALLOW_HEADERS = [
        'Content-Type',
        'Authorization',
        'X-Requested-With',
        'Accept',
        'Origin'
    ]

    # Payroll batch processing
    PAYROLL_MAX_WORKERS = int(os.getenv('PAYROLL_MAX_WORKERS', 8))

    # Logging Configuration
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FORMAT = os.getenv(
        'LOG_FORMAT',
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    LOG_JSON = os.getenv('LOG_JSON', 'False').lower() == 'true'

    def __init__(self):
        print("Loaded Configuration:")
        self._print_config()

    def _print_config(self):
        """Print configuration values, masking sensitive data."""
        for key in sorted(dir(self)):
            if key.isupper():
                value = getattr(self, key)
                if any(sensitive in key for sensitive in ['SECRET', 'KEY', 'PASSWORD', 'URI']):
                    print(f"- {key}: Set")
                else:
                    print(f"- {key}: {value}")
