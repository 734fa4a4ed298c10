"""
Test the named-operation inventory calculator used by the order forms.
"""
import pytest

from tradesupply.buisness.inventory.errors import MissingCalculatorParameter, UnknownInventoryOperation
from tradesupply.buisness.inventory.stock.inventory_calculator import OPERATIONS, inventory_calculator


def test_known_operations():
    assert set(OPERATIONS) == {
        'quantityToPalletsLayers',
        'palletsLayersToQuantity',
        'calculateNewLevels',
        'calculateInventoryImpact',
    }


def test_quantity_to_pallets_layers():
    """Test camelCase parameters as sent by the order forms"""
    result = inventory_calculator('quantityToPalletsLayers', {
        'quantity': 103,
        'feetPerLayer': 10,
        'layersPerPallet': 5,
    })
    assert result == {'pallets': 2, 'layers': 1}, "103 ft should need 2 pallets and 1 layer"


def test_snake_case_parameters_accepted():
    result = inventory_calculator('quantityToPalletsLayers', {
        'quantity': 100,
        'feet_per_layer': 10,
        'layers_per_pallet': 5,
    })
    assert result == {'pallets': 2, 'layers': 0}


def test_pallets_layers_to_quantity():
    result = inventory_calculator('palletsLayersToQuantity', {
        'pallets': 2,
        'layers': 1,
        'feetPerLayer': 10,
        'layersPerPallet': 5,
    })
    assert result == 110


def test_calculate_new_levels():
    """Test new pallets/layers after a removal larger than the stock"""
    result = inventory_calculator('calculateNewLevels', {
        'currentPallets': 0,
        'currentLayers': 0,
        'changePallets': -1,
        'changeLayers': 2,
        'layersPerPallet': 5,
    })
    assert result == {'newPallets': 0, 'newLayers': -3}


def test_calculate_inventory_impact_packed():
    result = inventory_calculator('calculateInventoryImpact', {
        'currentQuantity': 100,
        'currentPallets': 2,
        'currentLayers': 0,
        'changeQuantity': 80,
        'changePallets': 1,
        'changeLayers': 3,
        'isUsingPalletsLayers': True,
        'feetPerLayer': 10,
        'layersPerPallet': 5,
    })
    assert result == {'newQuantity': 180, 'newPallets': 3, 'newLayers': 3}, "Packed change should be used"


def test_calculate_inventory_impact_quantity():
    result = inventory_calculator('calculateInventoryImpact', {
        'currentQuantity': 110,
        'currentPallets': 2,
        'currentLayers': 1,
        'changeQuantity': 25,
        'isUsingPalletsLayers': False,
        'feetPerLayer': 10,
        'layersPerPallet': 5,
    })
    assert result == {'newQuantity': 135, 'newPallets': 2, 'newLayers': 4}


def test_calculate_inventory_impact_falls_back_to_quantity():
    """Test pallet mode without both pallet and layer changes uses the quantity"""
    result = inventory_calculator('calculateInventoryImpact', {
        'currentQuantity': 110,
        'currentPallets': 2,
        'currentLayers': 1,
        'changeQuantity': 25,
        'changePallets': 1,
        'changeLayers': None,
        'isUsingPalletsLayers': True,
        'feetPerLayer': 10,
        'layersPerPallet': 5,
    })
    assert result == {'newQuantity': 135, 'newPallets': 2, 'newLayers': 4}


def test_unknown_operation():
    with pytest.raises(UnknownInventoryOperation, match="Unknown operation: bogus"):
        inventory_calculator('bogus', {})


def test_missing_parameter():
    with pytest.raises(MissingCalculatorParameter, match="feetPerLayer"):
        inventory_calculator('quantityToPalletsLayers', {'quantity': 10, 'layersPerPallet': 5})


def test_none_params_treated_as_empty():
    with pytest.raises(MissingCalculatorParameter):
        inventory_calculator('palletsLayersToQuantity', None)
