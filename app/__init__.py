"""
Flask application factory for the Feedback Insights API.
"""
from flask import Flask
from flask_cors import CORS
import logging
from config import config as config_by_name

# Initialize extensions
cors = CORS()

logger = logging.getLogger(__name__)


def _build_store(cfg):
    if cfg.REPORT_STORE == 'memory':
        from services.memory_report_store import InMemoryReportStore
        return InMemoryReportStore()

    from services.supabase_service import SupabaseReportStore
    return SupabaseReportStore(
        url=cfg.SUPABASE_URL,
        key=cfg.SUPABASE_KEY,
        table=cfg.SUPABASE_REPORTS_TABLE
    )


def create_app(
    config_name: str = 'default',
    store=None,
    classifier=None,
    rate_limiter=None,
) -> Flask:
    """
    Application factory pattern.

    Args:
        config_name: Configuration name (development, production, testing)
        store: Optional IReportStore (built from config when omitted)
        classifier: Optional IFeedbackClassifier (OpenAIService when omitted)
        rate_limiter: Optional IRateLimiter (built from config when omitted)

    Returns:
        Flask application instance
    """
    cfg = config_by_name.get(config_name, config_by_name['default'])

    app = Flask(__name__)

    # Load configuration
    app.config.from_object(cfg)

    # Initialize extensions
    cors.init_app(app, resources={
        r"/api/*": {
            "origins": cfg.CORS_ORIGINS,
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type"]
        }
    })

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, cfg.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(cfg.LOG_FILE) if cfg.LOG_FILE else logging.StreamHandler()
        ]
    )

    # Wire collaborators
    from services.openai_service import OpenAIService
    from utils.rate_limiter import build_rate_limiter
    from app.services import AnalysisHandler, ReportService

    store = store if store is not None else _build_store(cfg)
    classifier = classifier if classifier is not None else OpenAIService(
        api_key=cfg.OPENAI_API_KEY,
        model=cfg.OPENAI_MODEL,
        timeout=cfg.OPENAI_TIMEOUT_SECONDS
    )
    rate_limiter = rate_limiter if rate_limiter is not None else build_rate_limiter(cfg)

    app.extensions['feedback_insights'] = {
        'store': store,
        'classifier': classifier,
        'rate_limiter': rate_limiter,
        'handler': AnalysisHandler(store=store, classifier=classifier, rate_limiter=rate_limiter),
        'reports': ReportService(store=store),
    }
    logger.info(f"Feedback Insights configured (store={store.backend_name}, model={classifier.model_name})")

    # Register blueprints
    from app.routes import analysis_bp, reports_bp, health_bp
    app.register_blueprint(analysis_bp, url_prefix='/api')
    app.register_blueprint(reports_bp, url_prefix='/api')
    app.register_blueprint(health_bp, url_prefix='/api')

    # Register error handlers
    @app.errorhandler(404)
    def not_found(error):
        return {'error': 'Endpoint not found'}, 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return {'error': 'Method not allowed'}, 405

    @app.errorhandler(500)
    def internal_error(error):
        return {'error': 'Internal server error'}, 500

    @app.errorhandler(400)
    def bad_request(error):
        return {'error': 'Bad request'}, 400

    return app
