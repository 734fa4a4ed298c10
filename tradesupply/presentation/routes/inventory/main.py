"""
Inventory routes - JSON endpoints for inventory arithmetic
"""
from flask import Blueprint, jsonify
from tradesupply.utils.logger import get_logger

from tradesupply.presentation.routes.inventory.calculator.routes import register_calculator_routes

logger = get_logger("trade_supply.routes.inventory")

# Create inventory blueprint
inventory_bp = Blueprint('inventory', __name__, url_prefix='/inventory')


@inventory_bp.route('/api/health')
def health():
    """Liveness check for the inventory API"""
    return jsonify({'success': True, 'service': 'inventory'})


# Register all route modules
try:
    register_calculator_routes(inventory_bp)
    logger.debug("Registered calculator routes")
except Exception as e:
    logger.error(f"Failed to register calculator routes: {e}", exc_info=True)
    raise
