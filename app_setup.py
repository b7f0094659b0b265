# ------------------------------------------------------------
# app_setup.py
# ------------------------------------------------------------
"""
Application setup module for initializing all components.
Provides a central point for registering repositories, services, routes and error handlers.
"""
import logging
from flask import Flask
from flask_cors import CORS
from pymongo import MongoClient

from config import Config

# Import database modules
from db.indexes_setup import setup_all_indexes

# Import repositories
from repositories.taxRate_repository import TaxRateRepository
from repositories.employee_repository import EmployeeRepository
from repositories.payslip_repository import PayslipRepository, PayrollRepository

# Import services
from services import IDService, register_services

# Import logging and error utilities
from utils.logging import setup_logging
from utils.error_utils import AppError, handle_error

logger = logging.getLogger(__name__)

REPOSITORY_NAMES = (
    'tax_rate_repository',
    'employee_repository',
    'payslip_repository',
    'payroll_repository',
    'id_service'
)

def setup_database(app):
    """Set up MongoDB database connection."""
    try:
        mongo_uri = app.config.get('MONGO_URI', 'mongodb://localhost:27017/')
        db_name = app.config.get('MONGO_DBNAME', 'payroll_db')

        # Create MongoDB client
        client = MongoClient(
            mongo_uri,
            serverSelectionTimeoutMS=app.config.get('MONGO_SERVER_SELECTION_TIMEOUT', 10000)
        )
        db = client[db_name]

        # Test connection
        client.admin.command('ping')

        # Store client and db in app
        app.mongo = type('MongoConnection', (), {'client': client, 'db': db})

        logger.info(f"Connected to MongoDB database: {db_name}")

        # Set up indexes
        setup_all_indexes(db)

        return app.mongo

    except Exception as e:
        logger.error(f"Error connecting to MongoDB: {str(e)}")
        raise

def setup_repositories(app, repositories=None):
    """
    Set up repositories.

    Args:
        app: Flask application instance
        repositories (dict, optional): Prebuilt repositories keyed by
            REPOSITORY_NAMES, used instead of MongoDB-backed ones
    """
    try:
        if repositories is None:
            db = app.mongo.db
            repositories = {
                'tax_rate_repository': TaxRateRepository(db, app.config.get('COLLECTION_TAX_RATES')),
                'employee_repository': EmployeeRepository(db, app.config.get('COLLECTION_EMPLOYEES')),
                'payslip_repository': PayslipRepository(db, app.config.get('COLLECTION_PAYSLIPS')),
                'payroll_repository': PayrollRepository(db, app.config.get('COLLECTION_PAYROLLS')),
                'id_service': IDService(db)
            }

        missing = [name for name in REPOSITORY_NAMES if name not in repositories]
        if missing:
            raise ValueError(f"Missing repositories: {', '.join(missing)}")

        for name in REPOSITORY_NAMES:
            setattr(app, name, repositories[name])

        logger.info("Repositories initialized")

    except Exception as e:
        logger.error(f"Error setting up repositories: {str(e)}")
        raise

def setup_cors(app):
    """Set up CORS for the API endpoints."""
    CORS(app, resources={
        r"/api/*": {
            "origins": app.config.get('CORS_ORIGINS', '*'),
            "methods": app.config.get('CORS_METHODS', ['GET', 'POST', 'PUT', 'OPTIONS']),
            "allow_headers": app.config.get('CORS_ALLOW_HEADERS', ['Content-Type'])
        }
    })
    logger.info("CORS configured")

def register_routes(app):
    """Register all application routes."""
    try:
        from routes import register_routes as register_blueprints
        register_blueprints(app)

        logger.info("Routes registered")

    except Exception as e:
        logger.error(f"Error registering routes: {str(e)}")
        raise

def setup_error_handlers(app):
    """Set up application error handlers."""
    from flask import jsonify

    @app.errorhandler(AppError)
    def handle_app_error(error):
        return handle_error(error)

    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify({"success": False, "message": "Resource not found", "code": "NOT_FOUND"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"success": False, "message": "Method not allowed", "code": "METHOD_NOT_ALLOWED"}), 405

    @app.errorhandler(500)
    def internal_server_error(e):
        logger.error(f"500 error: {str(e)}")
        return jsonify({"success": False, "message": "Internal server error", "code": "INTERNAL_ERROR"}), 500

    logger.info("Error handlers registered")

def cleanup_resources(app):
    """Register cleanup handlers for application resources."""
    import atexit

    def close_db_connection():
        """Close the MongoDB client when the process exits."""
        if hasattr(app, 'mongo') and hasattr(app.mongo, 'client'):
            app.mongo.client.close()
            logger.info("MongoDB connection closed")

    atexit.register(close_db_connection)
    logger.info("Resource cleanup handlers registered")

def setup_app(app, repositories=None):
    """
    Set up all application components.

    Args:
        app: Flask application instance
        repositories (dict, optional): Prebuilt repositories; when given,
            no MongoDB connection is opened
    """
    try:
        with app.app_context():
            # Set up logging first
            setup_logging(app)

            # Setup core components
            if repositories is None:
                setup_database(app)

            # Set up repositories and services
            setup_repositories(app, repositories)
            register_services(app)

            # Register routes
            setup_cors(app)
            register_routes(app)

            # Set up error handlers
            setup_error_handlers(app)

            # Register cleanup handlers
            if repositories is None:
                cleanup_resources(app)

            logger.info("Application setup complete")

    except Exception as e:
        logger.error(f"Error setting up application: {str(e)}")
        raise

def create_app(config_object=None, repositories=None):
    """
    Factory function to create and configure a Flask application.

    Args:
        config_object: Configuration object or class
        repositories (dict, optional): Prebuilt repositories, e.g. in-memory
            ones for tests

    Returns:
        Flask: Configured Flask application
    """
    # Create Flask app
    app = Flask(__name__)

    # Load default configuration
    app.config.from_object(Config)

    # Load additional configuration if provided
    if config_object:
        app.config.from_object(config_object)

    # Set up all application components
    setup_app(app, repositories)

    return app
