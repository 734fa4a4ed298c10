"""
Single entry point for inventory arithmetic requested by name.

Order forms and the JSON API ask for a calculation by operation name with a loose
parameter mapping. Parameter names are accepted in camelCase, as the order UIs send
them, or in snake_case.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Mapping

from tradesupply.buisness.inventory.errors import MissingCalculatorParameter, UnknownInventoryOperation
from tradesupply.buisness.inventory.stock.packed_stock import InventoryDelta, InventoryLevels, PackingSpec
from tradesupply.buisness.inventory.stock.unit_converter import (
    DEFAULT_QUANTITY_TOLERANCE,
    DELTA_MODE_PACKED,
    DELTA_MODE_QUANTITY,
    apply_packed_delta,
    apply_quantity_or_packed_delta,
    packed_to_quantity,
    quantity_to_packed,
)

OPERATION_QUANTITY_TO_PACKED = "quantityToPalletsLayers"
OPERATION_PACKED_TO_QUANTITY = "palletsLayersToQuantity"
OPERATION_NEW_LEVELS = "calculateNewLevels"
OPERATION_INVENTORY_IMPACT = "calculateInventoryImpact"

_MISSING = object()


def _snake_case(name: str) -> str:
    return re.sub(r'(?<!^)(?=[A-Z])', '_', name).lower()


def _param(params: Mapping[str, Any], name: str, default: Any = _MISSING) -> Any:
    for key in (name, _snake_case(name)):
        if key in params and params[key] is not None:
            return params[key]
    if default is _MISSING:
        raise MissingCalculatorParameter(f"Missing parameter '{name}'")
    return default


def _quantity_to_packed(params: Mapping[str, Any]) -> Dict[str, Any]:
    packed = quantity_to_packed(
        _param(params, 'quantity'),
        _param(params, 'feetPerLayer'),
        _param(params, 'layersPerPallet'),
    )
    return packed.to_dict()


def _packed_to_quantity(params: Mapping[str, Any]) -> float:
    return packed_to_quantity(
        _param(params, 'pallets'),
        _param(params, 'layers'),
        _param(params, 'feetPerLayer'),
        _param(params, 'layersPerPallet'),
    )


def _new_levels(params: Mapping[str, Any]) -> Dict[str, Any]:
    packed = apply_packed_delta(
        _param(params, 'currentPallets'),
        _param(params, 'currentLayers'),
        _param(params, 'changePallets'),
        _param(params, 'changeLayers'),
        _param(params, 'layersPerPallet'),
    )
    return {'newPallets': packed.pallets, 'newLayers': packed.layers}


def _inventory_impact(params: Mapping[str, Any]) -> Dict[str, Any]:
    change_pallets = _param(params, 'changePallets', None)
    change_layers = _param(params, 'changeLayers', None)
    # Pallet mode needs both halves of the packed change; otherwise the quantity is used
    use_packed = (
        bool(_param(params, 'isUsingPalletsLayers', False))
        and change_pallets is not None
        and change_layers is not None
    )

    current = InventoryLevels(
        quantity=_param(params, 'currentQuantity'),
        pallets=_param(params, 'currentPallets'),
        layers=_param(params, 'currentLayers'),
    )
    delta = InventoryDelta(
        quantity=_param(params, 'changeQuantity', 0),
        pallets=change_pallets if use_packed else 0,
        layers=change_layers if use_packed else 0,
    )
    spec = PackingSpec(_param(params, 'feetPerLayer'), _param(params, 'layersPerPallet'))

    adjustment = apply_quantity_or_packed_delta(
        current,
        delta,
        spec,
        DELTA_MODE_PACKED if use_packed else DELTA_MODE_QUANTITY,
        tolerance=_param(params, 'tolerance', DEFAULT_QUANTITY_TOLERANCE),
    )
    return {
        'newQuantity': adjustment.new_quantity,
        'newPallets': adjustment.new_pallets,
        'newLayers': adjustment.new_layers,
    }


OPERATIONS: Dict[str, Callable[[Mapping[str, Any]], Any]] = {
    OPERATION_QUANTITY_TO_PACKED: _quantity_to_packed,
    OPERATION_PACKED_TO_QUANTITY: _packed_to_quantity,
    OPERATION_NEW_LEVELS: _new_levels,
    OPERATION_INVENTORY_IMPACT: _inventory_impact,
}


def inventory_calculator(operation: str, params: Mapping[str, Any]) -> Any:
    """
    Run an inventory calculation by name.

    Args:
        operation: One of quantityToPalletsLayers, palletsLayersToQuantity,
            calculateNewLevels or calculateInventoryImpact
        params: Operation parameters

    Returns:
        The operation result: a dict for packed results, a number for quantities

    Raises:
        UnknownInventoryOperation: if the operation name is not recognized
        MissingCalculatorParameter: if a required parameter is absent
    """
    handler = OPERATIONS.get(operation)
    if handler is None:
        raise UnknownInventoryOperation(f"Unknown operation: {operation}")
    if params is None:
        params = {}
    return handler(params)
