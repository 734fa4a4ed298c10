"""
Inventory impact preview for purchase orders and customer orders.

Given the current stock of each variant and the lines of an order being created or
edited, computes what every affected variant's stock will be once the order is
saved. Purchase order lines add stock, customer order lines remove it, and lines
deleted from the order reverse their effect.

Nothing is written here; the order workflows persist the new levels themselves.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from tradesupply.buisness.inventory.errors import UnknownOrderType
from tradesupply.buisness.inventory.stock.packed_stock import (
    InventoryAdjustment,
    InventoryDelta,
    InventoryLevels,
    PackingSpec,
    require_finite,
)
from tradesupply.buisness.inventory.stock.stock_levels import is_packed_unit
from tradesupply.buisness.inventory.stock.unit_converter import (
    DEFAULT_QUANTITY_TOLERANCE,
    DELTA_MODE_PACKED,
    DELTA_MODE_QUANTITY,
    apply_quantity_or_packed_delta,
)
from tradesupply.utils.logger import get_logger

logger = get_logger("trade_supply.buisness.inventory.impact")

ORDER_TYPE_PURCHASE = "purchase_order"
ORDER_TYPE_CUSTOMER = "customer_order"

# Direction of an order line's effect on stock
ORDER_DIRECTIONS = {
    ORDER_TYPE_PURCHASE: 1,
    ORDER_TYPE_CUSTOMER: -1,
}

# Used when a product has no packing constants on record
DEFAULT_FEET_PER_LAYER = 100
DEFAULT_LAYERS_PER_PALLET = 10


def order_direction(order_type: str) -> int:
    try:
        return ORDER_DIRECTIONS[order_type]
    except KeyError:
        raise UnknownOrderType(
            f"Unknown order type {order_type!r}; expected {ORDER_TYPE_PURCHASE} or {ORDER_TYPE_CUSTOMER}"
        ) from None


@dataclass(frozen=True)
class VariantStock:
    """Stock record of a product variant as read from the product tables"""
    variant_id: str
    variant_name: str = ""
    product_name: str = ""
    unit: Optional[str] = None
    quantity: float = 0
    pallets: float = 0
    layers: float = 0
    warning_threshold: Optional[float] = None
    critical_threshold: Optional[float] = None
    feet_per_layer: float = DEFAULT_FEET_PER_LAYER
    layers_per_pallet: float = DEFAULT_LAYERS_PER_PALLET

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        default_feet_per_layer: float = DEFAULT_FEET_PER_LAYER,
        default_layers_per_pallet: float = DEFAULT_LAYERS_PER_PALLET,
    ) -> "VariantStock":
        """
        Build a stock record from a row, defaulting nulls.

        Missing stock figures become 0. Missing or zero packing constants fall back
        to the defaults, the same way the order forms treat them.
        """
        return cls(
            variant_id=str(data['variant_id']),
            variant_name=data.get('variant_name') or "",
            product_name=data.get('product_name') or "",
            unit=data.get('unit'),
            quantity=data.get('quantity') or 0,
            pallets=data.get('pallets') or 0,
            layers=data.get('layers') or 0,
            warning_threshold=data.get('warning_threshold'),
            critical_threshold=data.get('critical_threshold'),
            feet_per_layer=data.get('feet_per_layer') or default_feet_per_layer,
            layers_per_pallet=data.get('layers_per_pallet') or default_layers_per_pallet,
        )

    @property
    def is_packed(self) -> bool:
        return is_packed_unit(self.unit)

    @property
    def levels(self) -> InventoryLevels:
        return InventoryLevels(self.quantity, self.pallets, self.layers)

    @property
    def spec(self) -> PackingSpec:
        return PackingSpec(self.feet_per_layer, self.layers_per_pallet)


@dataclass(frozen=True)
class OrderLine:
    """
    One line of an order as it stands in the form.

    original_* hold the saved amounts of a line being edited; they are None for
    lines that have not been saved yet.
    """
    variant_id: str
    quantity: float = 0
    pallets: Optional[float] = None
    layers: Optional[float] = None
    is_pallet: bool = False
    line_id: Optional[str] = None
    is_new: bool = True
    is_transient: bool = False
    original_quantity: Optional[float] = None
    original_pallets: Optional[float] = None
    original_layers: Optional[float] = None
    variant_name: str = ""
    product_name: str = ""
    unit: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OrderLine":
        return cls(
            variant_id=str(data['variant_id']),
            quantity=data.get('quantity') or 0,
            pallets=data.get('pallets'),
            layers=data.get('layers'),
            is_pallet=bool(data.get('is_pallet', False)),
            line_id=data.get('line_id'),
            is_new=bool(data.get('is_new', True)),
            is_transient=bool(data.get('is_transient', False)),
            original_quantity=data.get('original_quantity'),
            original_pallets=data.get('original_pallets'),
            original_layers=data.get('original_layers'),
            variant_name=data.get('variant_name') or "",
            product_name=data.get('product_name') or "",
            unit=data.get('unit'),
        )


@dataclass(frozen=True)
class InventoryChange:
    """
    One row of the inventory impact preview.

    change_* are the signed effect on stock: positive adds, negative removes.
    change_pallets/change_layers are None when the line is not a pallet line.
    """
    variant_id: str
    variant_name: str
    product_name: str
    unit: Optional[str]
    current_quantity: float
    current_pallets: Optional[float]
    current_layers: Optional[float]
    change_quantity: float
    change_pallets: Optional[float]
    change_layers: Optional[float]
    new_quantity: float
    new_pallets: float
    new_layers: float
    warning_threshold: Optional[float] = None
    critical_threshold: Optional[float] = None
    feet_per_layer: Optional[float] = None
    layers_per_pallet: Optional[float] = None
    is_deleted: bool = False
    is_transient: bool = False

    @property
    def has_change(self) -> bool:
        return not InventoryDelta(
            quantity=self.change_quantity,
            pallets=self.change_pallets or 0,
            layers=self.change_layers or 0,
        ).is_zero

    @property
    def is_warning(self) -> bool:
        return self.new_quantity < (self.warning_threshold or 0)

    @property
    def is_critical(self) -> bool:
        return self.new_quantity < (self.critical_threshold or 0)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['is_warning'] = self.is_warning
        data['is_critical'] = self.is_critical
        return data


def _require_finite_fields(prefix: str, record, *fields) -> None:
    for field in fields:
        value = getattr(record, field)
        if value is not None:
            require_finite(f"{prefix}.{field}", value)


def _validate(line: OrderLine, stock: VariantStock) -> None:
    """Reject non-numeric or non-finite amounts before any rounding."""
    _require_finite_fields(
        f"line {line.variant_id}", line,
        'quantity', 'pallets', 'layers', 'original_quantity', 'original_pallets', 'original_layers',
    )
    _require_finite_fields(
        f"stock {stock.variant_id}", stock,
        'quantity', 'pallets', 'layers', 'warning_threshold', 'critical_threshold',
    )


def _line_amounts(line: OrderLine, stock: VariantStock):
    """Whole-unit amounts of a line: quantity rounded up, pallets and layers rounded down."""
    quantity = math.ceil(line.quantity)
    if stock.is_packed and line.is_pallet:
        return quantity, math.floor(line.pallets or 0), math.floor(line.layers or 0)
    return quantity, None, None


def _apply(stock: VariantStock, sign: int, quantity, pallets, layers, tolerance: float) -> InventoryAdjustment:
    if not stock.is_packed:
        # Pallets and layers are not tracked for this unit, so there is nothing to reconcile against
        return InventoryAdjustment(stock.quantity + sign * quantity, stock.pallets, stock.layers)

    use_packed = stock.is_packed and pallets is not None and layers is not None
    delta = InventoryDelta(
        quantity=sign * quantity,
        pallets=sign * (pallets or 0),
        layers=sign * (layers or 0),
    )
    return apply_quantity_or_packed_delta(
        stock.levels,
        delta,
        stock.spec,
        DELTA_MODE_PACKED if use_packed else DELTA_MODE_QUANTITY,
        tolerance=tolerance,
    )


def _signed(sign: int, value):
    return None if value is None else sign * value


def _change_row(stock, line, sign, quantity, pallets, layers, adjustment, is_deleted):
    return InventoryChange(
        variant_id=stock.variant_id,
        variant_name=(line.variant_name if is_deleted and line.variant_name else stock.variant_name),
        product_name=(line.product_name if is_deleted and line.product_name else stock.product_name),
        unit=stock.unit,
        current_quantity=stock.quantity,
        current_pallets=stock.pallets if stock.is_packed else None,
        current_layers=stock.layers if stock.is_packed else None,
        change_quantity=sign * quantity,
        change_pallets=_signed(sign, pallets),
        change_layers=_signed(sign, layers),
        new_quantity=adjustment.new_quantity,
        new_pallets=adjustment.new_pallets,
        new_layers=adjustment.new_layers,
        warning_threshold=stock.warning_threshold,
        critical_threshold=stock.critical_threshold,
        feet_per_layer=stock.feet_per_layer,
        layers_per_pallet=stock.layers_per_pallet,
        is_deleted=is_deleted,
    )


def calculate_line_change(
    order_type: str,
    line: OrderLine,
    stock: VariantStock,
    tolerance: float = DEFAULT_QUANTITY_TOLERANCE,
) -> Optional[InventoryChange]:
    """
    Stock effect of an active order line.

    For a saved line being edited only the difference from the saved amounts is
    applied. Returns None when a saved line did not change, or a new line is empty.
    """
    sign = order_direction(order_type)
    _validate(line, stock)
    quantity, pallets, layers = _line_amounts(line, stock)

    if not line.is_new and line.original_quantity is not None:
        quantity = quantity - line.original_quantity
        if pallets is not None and line.original_pallets is not None:
            pallets = pallets - math.floor(line.original_pallets)
        if layers is not None and line.original_layers is not None:
            layers = layers - math.floor(line.original_layers)

    if quantity == 0 and (pallets or 0) == 0 and (layers or 0) == 0:
        if not line.is_new or line.quantity == 0:
            logger.debug(f"No inventory change for variant {line.variant_id}; skipping")
            return None

    adjustment = _apply(stock, sign, quantity, pallets, layers, tolerance)
    return _change_row(stock, line, sign, quantity, pallets, layers, adjustment, is_deleted=False)


def calculate_deleted_line_change(
    order_type: str,
    line: OrderLine,
    stock: Optional[VariantStock],
    tolerance: float = DEFAULT_QUANTITY_TOLERANCE,
) -> Optional[InventoryChange]:
    """
    Stock effect of a line removed from the order: its amounts are reversed.

    A transient line (added and removed before the order was saved) never touched
    stock, so it yields a placeholder row with no effect.
    """
    sign = -order_direction(order_type)

    if line.is_transient:
        return InventoryChange(
            variant_id=line.variant_id,
            variant_name=line.variant_name,
            product_name=line.product_name,
            unit=line.unit,
            current_quantity=0,
            current_pallets=None,
            current_layers=None,
            change_quantity=0,
            change_pallets=None,
            change_layers=None,
            new_quantity=0,
            new_pallets=0,
            new_layers=0,
            is_deleted=True,
            is_transient=True,
        )

    if stock is None:
        return None

    _validate(line, stock)
    quantity, pallets, layers = _line_amounts(line, stock)
    adjustment = _apply(stock, sign, quantity, pallets, layers, tolerance)
    return _change_row(stock, line, sign, quantity, pallets, layers, adjustment, is_deleted=True)


def build_inventory_impact(
    order_type: str,
    lines: Iterable[OrderLine],
    stocks: Mapping[str, VariantStock],
    deleted_lines: Iterable[OrderLine] = (),
    tolerance: float = DEFAULT_QUANTITY_TOLERANCE,
) -> List[InventoryChange]:
    """
    Build the full inventory impact preview of an order.

    Args:
        order_type: ORDER_TYPE_PURCHASE or ORDER_TYPE_CUSTOMER
        lines: Active lines of the order
        stocks: Current stock keyed by variant id
        deleted_lines: Lines removed from the order in this edit
        tolerance: Allowed drift between stored quantity and packed stock

    Returns:
        list[InventoryChange]: one row per affected line, active lines first
    """
    order_direction(order_type)
    changes: List[InventoryChange] = []

    for line in lines:
        stock = stocks.get(line.variant_id)
        if stock is None:
            logger.warning(f"No stock record for variant {line.variant_id}; line skipped from impact")
            continue
        change = calculate_line_change(order_type, line, stock, tolerance)
        if change is not None:
            changes.append(change)

    for line in deleted_lines:
        stock = stocks.get(line.variant_id)
        if stock is None and not line.is_transient:
            logger.warning(f"No stock record for deleted line variant {line.variant_id}; line skipped from impact")
            continue
        change = calculate_deleted_line_change(order_type, line, stock, tolerance)
        if change is not None:
            changes.append(change)

    return changes


def visible_changes(changes: Iterable[InventoryChange]) -> List[InventoryChange]:
    """Rows worth showing: no transient placeholders, no rows without a change."""
    return [change for change in changes if not change.is_transient and change.has_change]
