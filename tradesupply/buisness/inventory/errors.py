"""
Domain exceptions for inventory business logic

These exceptions are raised synchronously by the inventory layer when an input
cannot produce a meaningful stock figure. Nothing here is transient: callers
decide whether to surface the error or abort the update.
"""


class InventoryDomainError(ValueError):
    """Base exception for all inventory domain errors"""
    pass


class InvalidPackingSpec(InventoryDomainError):
    """Raised when feet per layer or layers per pallet is not a positive finite number"""
    pass


class NonFiniteInput(InventoryDomainError):
    """Raised when a quantity, pallet, layer or threshold argument is NaN, infinite or not a number"""
    pass


class InvalidDeltaMode(InventoryDomainError):
    """Raised when an inventory adjustment is requested with an unrecognized mode"""
    pass


class UnknownInventoryOperation(InventoryDomainError):
    """Raised when the inventory calculator is asked for an operation it does not know"""
    pass


class MissingCalculatorParameter(InventoryDomainError):
    """Raised when a calculator operation is missing one of its parameters"""
    pass


class UnknownOrderType(InventoryDomainError):
    """Raised when an inventory impact is requested for an order type other than purchase or customer"""
    pass
