"""
Test the pallet/layer unit converter.
Covers the worked conversions, the negative-stock sign rules and the quantity
reconciliation used by the composite adjustment.
"""
import math

import pytest

from tradesupply.buisness.inventory.errors import InvalidDeltaMode, InvalidPackingSpec, NonFiniteInput
from tradesupply.buisness.inventory.stock.packed_stock import (
    InventoryDelta,
    InventoryLevels,
    PackedStock,
    PackingSpec,
)
from tradesupply.buisness.inventory.stock.unit_converter import (
    DELTA_MODE_PACKED,
    DELTA_MODE_QUANTITY,
    apply_packed_delta,
    apply_quantity_or_packed_delta,
    packed_to_quantity,
    quantity_to_packed,
    reconcile_quantity,
)


def test_quantity_to_packed_whole_pallets():
    """Test an exact multiple of a pallet"""
    assert quantity_to_packed(100, 10, 5) == PackedStock(2, 0), "10 layers should be 2 full pallets"


def test_quantity_to_packed_rounds_partial_layer_up():
    """Test a partial layer takes up a whole layer"""
    assert quantity_to_packed(103, 10, 5) == PackedStock(2, 1), "10.3 layers should round up to 11"


def test_quantity_to_packed_negative_partial_layer():
    """Test a deficit under one layer"""
    result = quantity_to_packed(-5, 10, 5)
    assert result.pallets == -1, "Pallets should come from the floor division"
    assert result.layers == -1, "Positive remainder should be shifted below zero"


def test_quantity_to_packed_negative_partial_pallet_keeps_pallet_count():
    """Test the pallet count of a deficit is not moved when its layers are"""
    # -3 layers: floor division gives -1 pallet and 2 layers, only the layers are shifted
    assert quantity_to_packed(-30, 10, 5) == PackedStock(-1, -3)


def test_quantity_to_packed_negative_whole_pallets():
    assert quantity_to_packed(-100, 10, 5) == PackedStock(-2, 0)


def test_quantity_to_packed_float_layer_boundary():
    """Test quantities that land on a layer boundary are not bumped by float error"""
    assert quantity_to_packed(0.3, 0.1, 5) == PackedStock(0, 3), "0.3 / 0.1 should be exactly 3 layers"
    assert quantity_to_packed(0.7, 0.1, 5) == PackedStock(1, 2), "0.7 / 0.1 should be exactly 7 layers"


def test_quantity_to_packed_large_partial_layer():
    """Test half a layer still rounds away from zero at a billion layers"""
    assert quantity_to_packed(10_000_000_005, 10, 5) == PackedStock(200000000, 1), "Partial layer should round up"
    # floor gives -1000000001 layers: -200000001 pallets and 4 layers, shifted to -1
    assert quantity_to_packed(-10_000_000_005, 10, 5) == PackedStock(-200000001, -1), "Deficit should round down"


def test_quantity_to_packed_zero():
    assert quantity_to_packed(0, 10, 5) == PackedStock(0, 0)


@pytest.mark.parametrize("feet_per_layer,layers_per_pallet", [
    (0, 5),
    (-10, 5),
    (10, 0),
    (float('nan'), 5),
    (10, float('inf')),
])
def test_quantity_to_packed_rejects_bad_packing_spec(feet_per_layer, layers_per_pallet):
    """Test packing constants must be positive and finite"""
    with pytest.raises(InvalidPackingSpec):
        quantity_to_packed(50, feet_per_layer, layers_per_pallet)


@pytest.mark.parametrize("quantity", [float('nan'), float('inf'), float('-inf'), None, "12", True])
def test_quantity_to_packed_rejects_non_finite_quantity(quantity):
    with pytest.raises(NonFiniteInput):
        quantity_to_packed(quantity, 10, 5)


def test_packed_to_quantity():
    """Test pallets and layers convert back to feet"""
    assert packed_to_quantity(2, 1, 10, 5) == 110, "2 pallets + 1 layer at 10 ft/layer should be 110"
    assert packed_to_quantity(0, -3, 10, 5) == -30, "Negative layers should give a negative quantity"
    assert packed_to_quantity(0, 0, 10, 5) == 0


def test_packed_to_quantity_rejects_bad_input():
    with pytest.raises(InvalidPackingSpec):
        packed_to_quantity(1, 1, 10, -5)
    with pytest.raises(NonFiniteInput):
        packed_to_quantity(float('nan'), 1, 10, 5)


@pytest.mark.parametrize("feet_per_layer,layers_per_pallet", [(10, 5), (12.5, 8), (1, 1), (100, 10)])
def test_exact_layer_multiples_round_trip(feet_per_layer, layers_per_pallet):
    """Test whole-layer quantities survive a conversion round trip"""
    for n in range(0, 60):
        quantity = n * feet_per_layer
        packed = quantity_to_packed(quantity, feet_per_layer, layers_per_pallet)
        back = packed_to_quantity(packed.pallets, packed.layers, feet_per_layer, layers_per_pallet)
        assert back == pytest.approx(quantity), f"{quantity} should round trip unchanged"

    # Deficits round trip when they are whole pallets
    for pallets in range(-5, 0):
        quantity = pallets * layers_per_pallet * feet_per_layer
        packed = quantity_to_packed(quantity, feet_per_layer, layers_per_pallet)
        assert packed == PackedStock(pallets, 0), f"{quantity} should be {pallets} whole pallets"


def test_quantity_to_packed_sign_consistency():
    """Test a negative pallet count never carries positive layers"""
    for quantity in range(-300, 301, 7):
        packed = quantity_to_packed(quantity, 10, 5)
        if packed.pallets < 0:
            assert packed.layers <= 0, f"{quantity} gave {packed}"
        if quantity >= 0:
            assert packed.pallets >= 0 and packed.layers >= 0, f"{quantity} gave {packed}"


def test_quantity_to_packed_monotonic():
    """Test more stock never means fewer pallets"""
    previous = None
    for quantity in range(-300, 301, 3):
        packed = quantity_to_packed(quantity, 10, 5)
        if previous is not None:
            assert packed.pallets >= previous.pallets, f"Pallets dropped at {quantity}"
            if quantity > 0:
                assert packed.total_layers(5) >= previous.total_layers(5), f"Layers dropped at {quantity}"
        previous = packed


def test_apply_packed_delta_normalizes_deficit():
    """Test removing more than is on hand"""
    result = apply_packed_delta(0, 0, -1, 2, 5)
    assert result == PackedStock(0, -3), "-3 layers should be 0 pallets and -3 layers"


def test_apply_packed_delta_carries_layers_into_pallets():
    assert apply_packed_delta(2, 4, 0, 3, 5) == PackedStock(3, 2), "7 layers should carry one pallet"
    assert apply_packed_delta(2, 1, 0, -3, 5) == PackedStock(1, 3), "Removing layers should borrow a pallet"


@pytest.mark.parametrize("pallets,layers", [(3, 2), (0, 0), (0, -3), (-2, -3), (-1, 0)])
def test_apply_packed_delta_zero_delta_is_noop(pallets, layers):
    assert apply_packed_delta(pallets, layers, 0, 0, 5) == PackedStock(pallets, layers)


def test_apply_packed_delta_conserves_total_layers():
    """Test normalization only moves layers between pallets and layers"""
    for current_pallets in range(-3, 4):
        for current_layers in range(-4, 5):
            for delta_pallets in range(-2, 3):
                for delta_layers in range(-6, 7, 3):
                    result = apply_packed_delta(current_pallets, current_layers, delta_pallets, delta_layers, 5)
                    expected = (current_pallets + delta_pallets) * 5 + current_layers + delta_layers
                    assert result.total_layers(5) == expected
                    if result.pallets < 0:
                        assert result.layers <= 0, f"Sign rule broken: {result}"


def test_apply_packed_delta_rejects_bad_input():
    with pytest.raises(InvalidPackingSpec):
        apply_packed_delta(1, 1, 1, 1, 0)
    with pytest.raises(NonFiniteInput):
        apply_packed_delta(1, float('inf'), 1, 1, 5)


def test_reconcile_quantity_trusts_matching_stored_quantity():
    spec = PackingSpec(10, 5)
    assert reconcile_quantity(InventoryLevels(110.005, 2, 1), spec) == 110.005, "Drift under tolerance is kept"


def test_reconcile_quantity_prefers_packed_stock():
    spec = PackingSpec(10, 5)
    assert reconcile_quantity(InventoryLevels(50, 2, 1), spec) == 110, "Stale quantity should be recomputed"
    assert reconcile_quantity(InventoryLevels(110.01, 2, 1), spec) == 110, "Drift at the tolerance is recomputed"


def test_reconcile_quantity_rejects_negative_tolerance():
    with pytest.raises(NonFiniteInput):
        reconcile_quantity(InventoryLevels(110, 2, 1), PackingSpec(10, 5), tolerance=-1)


def test_apply_quantity_or_packed_delta_packed_mode():
    """Test a packed delta derives the quantity from the new pallets and layers"""
    result = apply_quantity_or_packed_delta(
        InventoryLevels(100, 2, 0),
        InventoryDelta(pallets=1, layers=3),
        PackingSpec(10, 5),
        DELTA_MODE_PACKED,
    )
    assert (result.new_pallets, result.new_layers) == (3, 3), "13 layers should be 3 pallets and 3 layers"
    assert result.new_quantity == 180, "Quantity should follow the packed stock"


def test_apply_quantity_or_packed_delta_quantity_mode():
    result = apply_quantity_or_packed_delta(
        InventoryLevels(110, 2, 1),
        InventoryDelta(quantity=25),
        PackingSpec(10, 5),
        DELTA_MODE_QUANTITY,
    )
    assert result.new_quantity == 135, "Quantity delta should be added as-is"
    assert (result.new_pallets, result.new_layers) == (2, 4), "13.5 layers should round up to 14"


def test_apply_quantity_or_packed_delta_reconciles_stale_quantity():
    """Test the stored quantity is replaced when it disagrees with pallets and layers"""
    result = apply_quantity_or_packed_delta(
        InventoryLevels(50, 2, 1),
        InventoryDelta(quantity=-20),
        PackingSpec(10, 5),
        DELTA_MODE_QUANTITY,
    )
    assert result.new_quantity == 90, "Delta should be applied to the recomputed 110"
    assert (result.new_pallets, result.new_layers) == (1, 4)


def test_apply_quantity_or_packed_delta_keeps_quantity_within_tolerance():
    result = apply_quantity_or_packed_delta(
        InventoryLevels(110.005, 2, 1),
        InventoryDelta(quantity=10),
        PackingSpec(10, 5),
        DELTA_MODE_QUANTITY,
    )
    assert result.new_quantity == pytest.approx(120.005), "Stored quantity should be kept"
    assert (result.new_pallets, result.new_layers) == (2, 3), "12.0005 layers should round up to 13"


def test_apply_quantity_or_packed_delta_rejects_unknown_mode():
    with pytest.raises(InvalidDeltaMode):
        apply_quantity_or_packed_delta(InventoryLevels(0, 0, 0), InventoryDelta(), PackingSpec(10, 5), "pallets")


def test_apply_quantity_or_packed_delta_rejects_non_finite_levels():
    with pytest.raises(NonFiniteInput):
        apply_quantity_or_packed_delta(
            InventoryLevels(math.nan, 0, 0),
            InventoryDelta(quantity=1),
            PackingSpec(10, 5),
            DELTA_MODE_QUANTITY,
        )


def test_packing_spec_validates_on_construction():
    assert PackingSpec(10, 5).feet_per_pallet == 50
    with pytest.raises(InvalidPackingSpec):
        PackingSpec(10, -1)


def test_inventory_delta_is_zero():
    assert InventoryDelta().is_zero
    assert not InventoryDelta(layers=-1).is_zero
