"""
Inventory unit converter

Converts stock between a continuous quantity (square feet, linear feet) and the
pallets + layers it physically occupies, and computes new stock levels after an
addition or removal. Every function is pure: the packing constants come from the
product record and the results go back to whoever persists them.

Sign convention for negative (oversold) stock:
- a negative pallet count never carries a positive layer remainder
- positive quantities round up to whole layers, negative ones round down
"""

from __future__ import annotations

import math

from tradesupply.buisness.inventory.errors import InvalidDeltaMode, NonFiniteInput
from tradesupply.buisness.inventory.stock.packed_stock import (
    InventoryAdjustment,
    InventoryDelta,
    InventoryLevels,
    PackedStock,
    PackingSpec,
    require_finite,
    require_positive_constant,
)
from tradesupply.utils.logger import get_logger

logger = get_logger("trade_supply.buisness.inventory.unit_converter")

DELTA_MODE_PACKED = "packed"
DELTA_MODE_QUANTITY = "quantity"
DELTA_MODES = (DELTA_MODE_PACKED, DELTA_MODE_QUANTITY)

# Stored quantities within this distance of the packed figure are trusted as-is
DEFAULT_QUANTITY_TOLERANCE = 0.01

# Layer counts this close to a whole number are treated as that number
_WHOLE_LAYER_EPSILON = 1e-9


def _whole_layers(quantity: float, feet_per_layer: float) -> int:
    exact_layers = quantity / feet_per_layer
    nearest = round(exact_layers)
    if math.isclose(exact_layers, nearest, rel_tol=0, abs_tol=_WHOLE_LAYER_EPSILON):
        return int(nearest)
    # A partial layer still takes up a whole one; deficits round away from zero too
    if quantity >= 0:
        return math.ceil(exact_layers)
    return math.floor(exact_layers)


def _split_layers(total_layers: float, layers_per_pallet: float) -> tuple[int, float]:
    pallets = math.floor(total_layers / layers_per_pallet)
    layers = total_layers - pallets * layers_per_pallet
    return pallets, layers


def quantity_to_packed(quantity: float, feet_per_layer: float, layers_per_pallet: float) -> PackedStock:
    """
    Convert a quantity into whole pallets and layers.

    Args:
        quantity: Stock in the product's unit, may be negative
        feet_per_layer: Feet in one layer (> 0)
        layers_per_pallet: Layers in one pallet (> 0)

    Returns:
        PackedStock: pallets and the remaining layers

    Raises:
        InvalidPackingSpec: if either packing constant is not a positive finite number
        NonFiniteInput: if quantity is NaN or infinite
    """
    require_positive_constant("feet_per_layer", feet_per_layer)
    require_positive_constant("layers_per_pallet", layers_per_pallet)
    require_finite("quantity", quantity)

    total_layers = _whole_layers(quantity, feet_per_layer)
    pallets, layers = _split_layers(total_layers, layers_per_pallet)

    # Only the layers move here; the pallet count from the floor division is kept
    if pallets < 0 and layers > 0:
        layers = layers - layers_per_pallet

    return PackedStock(pallets=pallets, layers=layers)


def packed_to_quantity(pallets: float, layers: float, feet_per_layer: float, layers_per_pallet: float) -> float:
    """
    Convert pallets and layers back into a quantity.

    This is not a lossless inverse of quantity_to_packed: stock that needed a partial
    layer comes back as the whole layer it was rounded to.
    """
    require_positive_constant("feet_per_layer", feet_per_layer)
    require_positive_constant("layers_per_pallet", layers_per_pallet)
    require_finite("pallets", pallets)
    require_finite("layers", layers)

    total_layers = pallets * layers_per_pallet + layers
    return total_layers * feet_per_layer


def apply_packed_delta(
    current_pallets: float,
    current_layers: float,
    delta_pallets: float,
    delta_layers: float,
    layers_per_pallet: float,
) -> PackedStock:
    """
    Add a pallets/layers change to current stock and re-derive whole pallets.

    Positive deltas are additions, negative deltas removals. The total number of
    layers is the same before and after the pallet/layer split.
    """
    require_positive_constant("layers_per_pallet", layers_per_pallet)
    require_finite("current_pallets", current_pallets)
    require_finite("current_layers", current_layers)
    require_finite("delta_pallets", delta_pallets)
    require_finite("delta_layers", delta_layers)

    current_total = current_pallets * layers_per_pallet + current_layers
    delta_total = delta_pallets * layers_per_pallet + delta_layers
    new_pallets, new_layers = _split_layers(current_total + delta_total, layers_per_pallet)

    if new_pallets < 0 and new_layers > 0:
        new_layers = new_layers - layers_per_pallet
        new_pallets += 1

    return PackedStock(pallets=new_pallets, layers=new_layers)


def reconcile_quantity(
    current: InventoryLevels,
    spec: PackingSpec,
    tolerance: float = DEFAULT_QUANTITY_TOLERANCE,
) -> float:
    """
    Pick the current quantity to adjust from.

    The packed fields are the source of truth: when the stored quantity drifted
    from them by the tolerance or more, the figure recomputed from pallets and
    layers is used instead.
    """
    require_finite("tolerance", tolerance)
    if tolerance < 0:
        raise NonFiniteInput(f"tolerance must not be negative, got {tolerance!r}")

    recomputed = packed_to_quantity(current.pallets, current.layers, spec.feet_per_layer, spec.layers_per_pallet)
    if abs(recomputed - current.quantity) < tolerance:
        return current.quantity

    logger.debug(
        f"Stored quantity {current.quantity} disagrees with packed stock "
        f"({current.pallets} pallets, {current.layers} layers = {recomputed}); using packed figure"
    )
    return recomputed


def apply_quantity_or_packed_delta(
    current: InventoryLevels,
    delta: InventoryDelta,
    spec: PackingSpec,
    mode: str,
    tolerance: float = DEFAULT_QUANTITY_TOLERANCE,
) -> InventoryAdjustment:
    """
    Apply a delta given either as a quantity or as pallets/layers.

    Args:
        current: Current quantity, pallets and layers of the variant
        delta: Requested change; only the part matching mode is read
        spec: Packing constants of the product
        mode: "packed" or "quantity"
        tolerance: Allowed drift between stored quantity and packed stock

    Returns:
        InventoryAdjustment: new quantity, pallets and layers

    Raises:
        InvalidDeltaMode: if mode is neither "packed" nor "quantity"
        NonFiniteInput: if any level or delta value is NaN or infinite
    """
    if mode not in DELTA_MODES:
        raise InvalidDeltaMode(f"Unknown delta mode {mode!r}; expected one of {', '.join(DELTA_MODES)}")

    require_finite("current_quantity", current.quantity)
    require_finite("current_pallets", current.pallets)
    require_finite("current_layers", current.layers)

    if mode == DELTA_MODE_PACKED:
        new_stock = apply_packed_delta(
            current.pallets,
            current.layers,
            delta.pallets,
            delta.layers,
            spec.layers_per_pallet,
        )
        new_quantity = packed_to_quantity(
            new_stock.pallets,
            new_stock.layers,
            spec.feet_per_layer,
            spec.layers_per_pallet,
        )
        return InventoryAdjustment(new_quantity, new_stock.pallets, new_stock.layers)

    require_finite("delta_quantity", delta.quantity)
    effective_quantity = reconcile_quantity(current, spec, tolerance)
    new_quantity = effective_quantity + delta.quantity
    new_stock = quantity_to_packed(new_quantity, spec.feet_per_layer, spec.layers_per_pallet)
    return InventoryAdjustment(new_quantity, new_stock.pallets, new_stock.layers)
