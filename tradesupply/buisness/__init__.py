"""
Domain layer for the trade supply system.
Contains the inventory arithmetic and order impact logic,
separated from persistence and presentation concerns.
"""
