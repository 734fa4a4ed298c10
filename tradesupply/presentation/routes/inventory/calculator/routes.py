"""
Inventory calculator routes - JSON endpoints over the inventory arithmetic

Order forms and the inventory screens post plain numbers here and get the converted
or adjusted stock back. Nothing is persisted by these endpoints.
"""
from flask import current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from tradesupply import limiter
from tradesupply.utils.logger import get_logger
from tradesupply.buisness.inventory.errors import InventoryDomainError
from tradesupply.buisness.inventory.stock.packed_stock import InventoryDelta, InventoryLevels, PackingSpec
from tradesupply.buisness.inventory.stock.unit_converter import (
    apply_packed_delta,
    apply_quantity_or_packed_delta,
    packed_to_quantity,
    quantity_to_packed,
)
from tradesupply.buisness.inventory.stock.inventory_calculator import inventory_calculator
from tradesupply.buisness.inventory.stock.stock_levels import (
    classify_stock_level,
    is_low_stock,
    is_over_max,
    is_packed_unit,
    overage_percentage,
    suggested_order_packed,
    suggested_order_quantity,
)
from tradesupply.buisness.inventory.impact.inventory_impact import (
    OrderLine,
    VariantStock,
    build_inventory_impact,
    visible_changes,
)

logger = get_logger("trade_supply.routes.inventory.calculator")

_MISSING = object()


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def _field(data, name, default=_MISSING):
    if name in data:
        return data[name]
    if default is _MISSING:
        raise BadRequest(f"Missing field '{name}'")
    return default


def _tolerance():
    return current_app.config.get('INVENTORY_QUANTITY_TOLERANCE', 0.01)


def _rate_limit():
    return current_app.config.get('CALCULATOR_RATE_LIMIT', '120 per minute')


def register_calculator_routes(inventory_bp):
    """Register all inventory calculator routes to the inventory blueprint"""

    @inventory_bp.errorhandler(InventoryDomainError)
    def inventory_domain_error(error):
        logger.warning(f"Inventory calculation rejected on {request.path}: {error}")
        return jsonify({
            'success': False,
            'error': str(error),
            'error_type': type(error).__name__,
        }), 400

    @inventory_bp.errorhandler(BadRequest)
    def bad_request(error):
        logger.warning(f"Bad inventory calculator request on {request.path}: {error.description}")
        return jsonify({'success': False, 'error': error.description, 'error_type': 'BadRequest'}), 400

    @inventory_bp.route('/api/convert/quantity-to-packed', methods=['POST'])
    @limiter.limit(_rate_limit)
    def convert_quantity_to_packed():
        """Convert a quantity into pallets and layers"""
        data = _json_body()
        packed = quantity_to_packed(
            _field(data, 'quantity'),
            _field(data, 'feet_per_layer'),
            _field(data, 'layers_per_pallet'),
        )
        return jsonify({'success': True, **packed.to_dict()})

    @inventory_bp.route('/api/convert/packed-to-quantity', methods=['POST'])
    @limiter.limit(_rate_limit)
    def convert_packed_to_quantity():
        """Convert pallets and layers into a quantity"""
        data = _json_body()
        quantity = packed_to_quantity(
            _field(data, 'pallets'),
            _field(data, 'layers'),
            _field(data, 'feet_per_layer'),
            _field(data, 'layers_per_pallet'),
        )
        return jsonify({'success': True, 'quantity': quantity})

    @inventory_bp.route('/api/adjust/packed', methods=['POST'])
    @limiter.limit(_rate_limit)
    def adjust_packed():
        """Apply a pallets/layers change to current pallets/layers"""
        data = _json_body()
        packed = apply_packed_delta(
            _field(data, 'current_pallets'),
            _field(data, 'current_layers'),
            _field(data, 'delta_pallets'),
            _field(data, 'delta_layers'),
            _field(data, 'layers_per_pallet'),
        )
        return jsonify({'success': True, **packed.to_dict()})

    @inventory_bp.route('/api/adjust', methods=['POST'])
    @limiter.limit(_rate_limit)
    def adjust():
        """Apply a quantity or pallets/layers change to a variant's stock"""
        data = _json_body()
        current = _field(data, 'current')
        delta = _field(data, 'delta')
        if not isinstance(current, dict) or not isinstance(delta, dict):
            raise BadRequest("'current' and 'delta' must be JSON objects")

        adjustment = apply_quantity_or_packed_delta(
            InventoryLevels(
                quantity=_field(current, 'quantity'),
                pallets=_field(current, 'pallets'),
                layers=_field(current, 'layers'),
            ),
            InventoryDelta(
                quantity=_field(delta, 'quantity', 0),
                pallets=_field(delta, 'pallets', 0),
                layers=_field(delta, 'layers', 0),
            ),
            PackingSpec(_field(data, 'feet_per_layer'), _field(data, 'layers_per_pallet')),
            _field(data, 'mode'),
            tolerance=_tolerance(),
        )
        logger.debug(f"Adjusted stock ({data.get('mode')}): {current} -> {adjustment.to_dict()}")
        return jsonify({'success': True, **adjustment.to_dict()})

    @inventory_bp.route('/api/calculate', methods=['POST'])
    @limiter.limit(_rate_limit)
    def calculate():
        """Run a named inventory calculation"""
        data = _json_body()
        params = _field(data, 'params', {})
        if not isinstance(params, dict):
            raise BadRequest("'params' must be a JSON object")
        result = inventory_calculator(_field(data, 'operation'), params)
        return jsonify({'success': True, 'result': result})

    @inventory_bp.route('/api/stock-status', methods=['POST'])
    @limiter.limit(_rate_limit)
    def stock_status():
        """Classify a variant's stock and suggest a restock quantity"""
        data = _json_body()
        quantity = _field(data, 'quantity')
        warning_threshold = _field(data, 'warning_threshold')
        critical_threshold = _field(data, 'critical_threshold')
        max_quantity = _field(data, 'max_quantity', None)
        unit = _field(data, 'unit', None)

        result = {
            'success': True,
            'status': classify_stock_level(quantity, warning_threshold, critical_threshold, max_quantity),
            'is_low_stock': is_low_stock(quantity, warning_threshold),
            'is_over_max': is_over_max(quantity, max_quantity),
            'overage_percentage': overage_percentage(quantity, max_quantity),
            'suggested_order_quantity': suggested_order_quantity(quantity, warning_threshold, max_quantity),
            'suggested_order_packed': None,
        }

        feet_per_layer = _field(data, 'feet_per_layer', None)
        layers_per_pallet = _field(data, 'layers_per_pallet', None)
        if is_packed_unit(unit) and feet_per_layer and layers_per_pallet:
            result['suggested_order_packed'] = suggested_order_packed(
                quantity, warning_threshold, max_quantity, feet_per_layer, layers_per_pallet
            ).to_dict()

        return jsonify(result)

    @inventory_bp.route('/api/impact', methods=['POST'])
    @limiter.limit(_rate_limit)
    def order_impact():
        """Preview the inventory impact of a purchase or customer order"""
        data = _json_body()
        order_type = _field(data, 'order_type')
        try:
            stocks = {
                str(row['variant_id']): VariantStock.from_dict(
                    row,
                    default_feet_per_layer=current_app.config.get('DEFAULT_FEET_PER_LAYER', 100),
                    default_layers_per_pallet=current_app.config.get('DEFAULT_LAYERS_PER_PALLET', 10),
                )
                for row in _field(data, 'stocks')
            }
            lines = [OrderLine.from_dict(row) for row in _field(data, 'items', [])]
            deleted_lines = [OrderLine.from_dict(row) for row in _field(data, 'deleted_items', [])]
        except (KeyError, TypeError, AttributeError) as e:
            raise BadRequest(f"Malformed order impact request: {e}")

        changes = build_inventory_impact(order_type, lines, stocks, deleted_lines, tolerance=_tolerance())
        logger.info(f"Inventory impact computed for {order_type}: {len(changes)} rows")

        return jsonify({
            'success': True,
            'changes': [change.to_dict() for change in changes],
            'visible_variant_ids': [change.variant_id for change in visible_changes(changes)],
        })
