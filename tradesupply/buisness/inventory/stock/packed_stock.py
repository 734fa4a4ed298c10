"""
Value types for pallet/layer inventory arithmetic.

These are transient inputs and outputs of the unit converter. They are built by a
caller right before a conversion and thrown away afterwards; none of them is
persisted by this layer.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

from tradesupply.buisness.inventory.errors import InvalidPackingSpec, NonFiniteInput


def require_finite(name: str, value) -> None:
    """
    Reject anything that is not a finite real number.

    bool is refused even though it subclasses int; a True pallet count is a caller bug.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise NonFiniteInput(f"{name} must be a finite number, got {value!r}")
    if not math.isfinite(value):
        raise NonFiniteInput(f"{name} must be a finite number, got {value!r}")


def require_positive_constant(name: str, value) -> None:
    """Packing constants must be finite and strictly positive."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
        raise InvalidPackingSpec(f"{name} must be a finite number greater than 0, got {value!r}")
    if value <= 0:
        raise InvalidPackingSpec(f"{name} must be greater than 0, got {value!r}")


@dataclass(frozen=True)
class PackingSpec:
    """Conversion constants of a product: how many feet make a layer, how many layers make a pallet"""
    feet_per_layer: float
    layers_per_pallet: float

    def __post_init__(self):
        require_positive_constant("feet_per_layer", self.feet_per_layer)
        require_positive_constant("layers_per_pallet", self.layers_per_pallet)

    @property
    def feet_per_pallet(self) -> float:
        return self.feet_per_layer * self.layers_per_pallet


@dataclass(frozen=True)
class PackedStock:
    """
    Stock as whole pallets plus a layer remainder.

    Negative pallets carry a non-positive layer remainder.
    """
    pallets: float
    layers: float

    def total_layers(self, layers_per_pallet: float) -> float:
        return self.pallets * layers_per_pallet + self.layers

    def to_dict(self) -> dict:
        return {'pallets': self.pallets, 'layers': self.layers}


@dataclass(frozen=True)
class InventoryLevels:
    """Current stock of one product variant, nulls already defaulted by the caller"""
    quantity: float = 0
    pallets: float = 0
    layers: float = 0


@dataclass(frozen=True)
class InventoryDelta:
    """
    A requested stock change.

    Only one representation is read per adjustment: the quantity in "quantity"
    mode, pallets and layers in "packed" mode.
    """
    quantity: float = 0
    pallets: float = 0
    layers: float = 0

    @property
    def is_zero(self) -> bool:
        return self.quantity == 0 and self.pallets == 0 and self.layers == 0


@dataclass(frozen=True)
class InventoryAdjustment:
    """Stock of a variant after a delta has been applied"""
    new_quantity: float
    new_pallets: float
    new_layers: float

    def to_dict(self) -> dict:
        return {
            'new_quantity': self.new_quantity,
            'new_pallets': self.new_pallets,
            'new_layers': self.new_layers,
        }
