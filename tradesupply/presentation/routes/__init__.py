"""
Routes package for the trade supply system
Organized in a tiered structure mirroring the business layer
"""

from tradesupply.utils.logger import get_logger

logger = get_logger("trade_supply.routes")


def init_app(app):
    """Initialize all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from tradesupply.presentation.routes.inventory.main import inventory_bp

    app.register_blueprint(inventory_bp)

    logger.debug("All route blueprints registered")
