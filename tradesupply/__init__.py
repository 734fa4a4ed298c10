from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
import os
from tradesupply.utils.logger import get_logger

# Initialize extensions
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per day", "50 per hour"],
    storage_uri="memory://"  # Use Redis in production for distributed systems
)


def _env_flag(name, default):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(config=None):
    """
    Build the Flask application.

    Args:
        config (dict): Optional settings applied over the environment-derived configuration

    Returns:
        Flask: The configured application
    """
    app = Flask(__name__)

    logger = get_logger("trade_supply")
    logger.info("Initializing Flask application")

    # SECURITY: Require SECRET_KEY in environment - no fallback
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')

    # Inventory arithmetic
    app.config['INVENTORY_QUANTITY_TOLERANCE'] = float(os.environ.get('INVENTORY_QUANTITY_TOLERANCE', '0.01'))
    app.config['DEFAULT_FEET_PER_LAYER'] = float(os.environ.get('DEFAULT_FEET_PER_LAYER', '100'))
    app.config['DEFAULT_LAYERS_PER_PALLET'] = float(os.environ.get('DEFAULT_LAYERS_PER_PALLET', '10'))

    # Rate limiting (Flask-Limiter reads RATELIMIT_* keys)
    app.config['RATELIMIT_ENABLED'] = _env_flag('RATELIMIT_ENABLED', 'True')
    app.config['CALCULATOR_RATE_LIMIT'] = os.environ.get('CALCULATOR_RATE_LIMIT', '120 per minute')

    # HTTPS/TLS Configuration
    # Default to True (secure) for production - only disable for development
    app.config['ENABLE_HTTPS'] = _env_flag('ENABLE_HTTPS', 'True')
    app.config['FORCE_HTTPS_REDIRECT'] = _env_flag('FORCE_HTTPS_REDIRECT', 'True')

    if config:
        app.config.update(config)

    if not app.config['SECRET_KEY']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    if app.config['INVENTORY_QUANTITY_TOLERANCE'] < 0:
        logger.critical("INVENTORY_QUANTITY_TOLERANCE must not be negative")
        raise RuntimeError("INVENTORY_QUANTITY_TOLERANCE must not be negative")

    # Log security configuration status
    if app.config['ENABLE_HTTPS']:
        logger.info("HTTPS enforcement enabled")
        if app.config['FORCE_HTTPS_REDIRECT']:
            logger.info("Automatic HTTP to HTTPS redirect enabled")
    else:
        logger.warning("HTTPS enforcement DISABLED - Acceptable for development only!")

    limiter.init_app(app)
    logger.debug("Extensions initialized")

    from tradesupply.presentation.routes import init_app as init_routes
    init_routes(app)

    @app.before_request
    def enforce_https():
        """Redirect HTTP requests to HTTPS if HTTPS enforcement is enabled"""
        if app.config.get('ENABLE_HTTPS') and app.config.get('FORCE_HTTPS_REDIRECT'):
            from flask import request, redirect

            if not request.is_secure and not request.headers.get('X-Forwarded-Proto') == 'https':
                url = request.url.replace('http://', 'https://', 1)
                return redirect(url, code=301)

    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Content-Security-Policy'] = "default-src 'none'; frame-ancestors 'self'"

        if app.config.get('ENABLE_HTTPS'):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

        return response

    logger.info("Flask application initialization complete")

    return app
