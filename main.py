"""
Main entry point for the Feedback Insights Flask application.
"""
import os
import sys
import logging
from app import create_app
from config import config

logger = logging.getLogger(__name__)

config_name = os.getenv('FLASK_ENV', 'default')
cfg = config.get(config_name, config['default'])

# Validate configuration (only warn in development, don't exit)
try:
    cfg.validate()
except ValueError as e:
    is_dev = config_name in ['development', 'default'] or cfg.DEBUG
    if not is_dev:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    logger.warning(f"{e}")
    logger.warning("Analysis requests will fail until these variables are set (REPORT_STORE=memory needs no database)")

# Create Flask app
app = create_app(config_name=config_name)

if __name__ == '__main__':
    logger.info(f"Starting Feedback Insights on http://{cfg.HOST}:{cfg.PORT}")
    logger.info(f"API: http://{cfg.HOST}:{cfg.PORT}/api")
    app.run(
        host=cfg.HOST,
        port=cfg.PORT,
        debug=cfg.DEBUG
    )
