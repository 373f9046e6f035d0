"""Errors raised by the inventory core."""


class InventoryError(Exception):
    """Base class for inventory errors."""


class ValidationError(InventoryError, ValueError):
    """Operation rejected; state is unchanged and the message is user-facing."""


class PersistenceError(InventoryError):
    """A stored snapshot could not be decoded."""
