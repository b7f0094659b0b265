# -------------------------------------#
#               /app.py
# -------------------------------------#
import logging

from config import Config
from app_setup import create_app

logger = logging.getLogger(__name__)

# -------------------------------------#
#        Initialize Flask app
# -------------------------------------#
app = create_app(Config)

# Validate secret key in production
if app.config['SECRET_KEY'] == 'a_secure_random_key' and not app.config.get('DEBUG', False):
    logger.warning("Default secret key in use; set SECRET_KEY before deploying")

@app.route('/health')
def health():
    """Liveness check that also pings MongoDB."""
    try:
        app.mongo.client.admin.command('ping')
        return {"success": True, "database": "ok"}, 200
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return {"success": False, "database": "unavailable"}, 503

if __name__ == '__main__':
    app.run(
        host=Config.HOST,
        port=Config.PORT,
        debug=Config.DEBUG
    )
