"""
Inventory domain layer.

Organized into:
- stock/ - Pallet/layer unit conversion, stock adjustment and stock level rules
- impact/ - Inventory impact of purchase and customer orders
"""

from tradesupply.buisness.inventory.errors import (
    InventoryDomainError,
    InvalidPackingSpec,
    NonFiniteInput,
    InvalidDeltaMode,
    UnknownInventoryOperation,
    MissingCalculatorParameter,
    UnknownOrderType,
)
from tradesupply.buisness.inventory.stock import (
    PackedStock,
    PackingSpec,
    InventoryLevels,
    InventoryDelta,
    InventoryAdjustment,
    quantity_to_packed,
    packed_to_quantity,
    apply_packed_delta,
    apply_quantity_or_packed_delta,
    inventory_calculator,
)

__all__ = [
    'InventoryDomainError',
    'InvalidPackingSpec',
    'NonFiniteInput',
    'InvalidDeltaMode',
    'UnknownInventoryOperation',
    'MissingCalculatorParameter',
    'UnknownOrderType',
    'PackedStock',
    'PackingSpec',
    'InventoryLevels',
    'InventoryDelta',
    'InventoryAdjustment',
    'quantity_to_packed',
    'packed_to_quantity',
    'apply_packed_delta',
    'apply_quantity_or_packed_delta',
    'inventory_calculator',
]
