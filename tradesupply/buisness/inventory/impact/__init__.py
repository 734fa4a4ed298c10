from tradesupply.buisness.inventory.impact.inventory_impact import (
    ORDER_TYPE_PURCHASE,
    ORDER_TYPE_CUSTOMER,
    VariantStock,
    OrderLine,
    InventoryChange,
    calculate_line_change,
    calculate_deleted_line_change,
    build_inventory_impact,
    visible_changes,
)

__all__ = [
    'ORDER_TYPE_PURCHASE',
    'ORDER_TYPE_CUSTOMER',
    'VariantStock',
    'OrderLine',
    'InventoryChange',
    'calculate_line_change',
    'calculate_deleted_line_change',
    'build_inventory_impact',
    'visible_changes',
]
