# shop_inventory/database/repositories/errors.py


class DomainError(Exception):
    """Domain-level error the controller/UI can surface (message box)."""
    pass


class InsufficientStock(DomainError):
    """A bill asked for more units of a product than the ledger has on hand."""

    def __init__(self, product_id: int, requested: float, available: float):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Not enough stock for product #{product_id}: "
            f"requested {requested:g}, available {available:g}."
        )
