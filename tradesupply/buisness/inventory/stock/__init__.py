"""
Stock arithmetic: converting between quantities and pallets/layers, applying
additions and removals, and classifying stock levels.
"""

from tradesupply.buisness.inventory.stock.packed_stock import (
    PackedStock,
    PackingSpec,
    InventoryLevels,
    InventoryDelta,
    InventoryAdjustment,
)
from tradesupply.buisness.inventory.stock.unit_converter import (
    DELTA_MODE_PACKED,
    DELTA_MODE_QUANTITY,
    quantity_to_packed,
    packed_to_quantity,
    apply_packed_delta,
    apply_quantity_or_packed_delta,
)
from tradesupply.buisness.inventory.stock.inventory_calculator import inventory_calculator

__all__ = [
    'PackedStock',
    'PackingSpec',
    'InventoryLevels',
    'InventoryDelta',
    'InventoryAdjustment',
    'DELTA_MODE_PACKED',
    'DELTA_MODE_QUANTITY',
    'quantity_to_packed',
    'packed_to_quantity',
    'apply_packed_delta',
    'apply_quantity_or_packed_delta',
    'inventory_calculator',
]
