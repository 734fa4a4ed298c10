"""
Stock level rules used by the inventory warning and over-max reports.
"""

from __future__ import annotations

import math
from typing import Optional

from tradesupply.buisness.inventory.stock.packed_stock import PackedStock, require_finite
from tradesupply.buisness.inventory.stock.unit_converter import quantity_to_packed

# Units whose stock is also tracked as pallets and layers
PACKED_UNITS = ("Square Feet", "Linear Feet")

STOCK_STATUS_CRITICAL = "critical"
STOCK_STATUS_WARNING = "warning"
STOCK_STATUS_OVER_MAX = "over_max"
STOCK_STATUS_OK = "ok"


def is_packed_unit(unit: Optional[str]) -> bool:
    return unit in PACKED_UNITS


def classify_stock_level(
    quantity: float,
    warning_threshold: float,
    critical_threshold: float,
    max_quantity: Optional[float] = None,
) -> str:
    """
    Classify a variant's stock for the status badge.

    Critical wins over warning; a variant at or under its warning threshold is never
    reported as over max.
    """
    require_finite("quantity", quantity)
    require_finite("warning_threshold", warning_threshold)
    require_finite("critical_threshold", critical_threshold)

    if quantity <= critical_threshold:
        return STOCK_STATUS_CRITICAL
    if quantity <= warning_threshold:
        return STOCK_STATUS_WARNING
    if is_over_max(quantity, max_quantity):
        return STOCK_STATUS_OVER_MAX
    return STOCK_STATUS_OK


def is_low_stock(quantity: float, warning_threshold: float) -> bool:
    """Low stock report filter: strictly under the warning threshold."""
    require_finite("quantity", quantity)
    require_finite("warning_threshold", warning_threshold)
    return quantity < warning_threshold


def is_over_max(quantity: float, max_quantity: Optional[float]) -> bool:
    if max_quantity is None:
        return False
    require_finite("quantity", quantity)
    require_finite("max_quantity", max_quantity)
    return quantity > max_quantity


def overage_percentage(quantity: float, max_quantity: Optional[float]) -> int:
    """Percentage over max quantity, rounded half up. 0 when no max is set."""
    if not max_quantity:
        return 0
    require_finite("quantity", quantity)
    require_finite("max_quantity", max_quantity)
    return math.floor((quantity - max_quantity) / max_quantity * 100 + 0.5)


def suggested_order_quantity(
    quantity: float,
    warning_threshold: float,
    max_quantity: Optional[float] = None,
) -> float:
    """
    Quantity to put on a restock purchase order.

    Tops the variant up to its max quantity when one is set, otherwise orders one
    warning threshold's worth.
    """
    require_finite("quantity", quantity)
    require_finite("warning_threshold", warning_threshold)
    if max_quantity:
        require_finite("max_quantity", max_quantity)
        return max(max_quantity - quantity, 0)
    return warning_threshold


def suggested_order_packed(
    quantity: float,
    warning_threshold: float,
    max_quantity: Optional[float],
    feet_per_layer: float,
    layers_per_pallet: float,
) -> PackedStock:
    order_quantity = suggested_order_quantity(quantity, warning_threshold, max_quantity)
    return quantity_to_packed(order_quantity, feet_per_layer, layers_per_pallet)
