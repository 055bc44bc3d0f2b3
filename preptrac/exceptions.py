"""Domain errors raised by services and mapped to HTTP responses by the routers."""


class PrepTracError(Exception):
    """Base class for domain errors."""


class InsufficientQuantityError(PrepTracError):
    """A consumption would drive an item's quantity below zero."""

    def __init__(self, item_name: str, available: float, requested: float):
        self.item_name = item_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Cannot consume {requested:g} of '{item_name}': only {available:g} available"
        )


class InvalidReferenceError(PrepTracError):
    """A category, location or item id does not belong to the user."""
