"""
Errors raised while committing a sale.

Every error carries a machine-readable ``code`` and the HTTP status the API
answers with, and names the offending product where there is one.
"""


class SaleError(Exception):
    """Base class for all sale commit failures."""

    code = "sale_error"
    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def as_dict(self):
        return {"detail": self.message, "code": self.code}


class SaleValidationError(SaleError):
    """Raised for an empty cart or a non-positive quantity."""

    code = "invalid_sale"
    status_code = 400

    def __init__(self, message, line=None):
        super().__init__(message)
        self.line = line

    def as_dict(self):
        data = super().as_dict()
        if self.line is not None:
            data["line"] = self.line
        return data


class ProductNotFound(SaleError):
    """Raised when a product does not exist or belongs to another user."""

    code = "product_not_found"
    status_code = 404

    def __init__(self, product_id):
        super().__init__(f"Product with id {product_id} not found or not owned by user")
        self.product_id = product_id

    def as_dict(self):
        data = super().as_dict()
        data["product_id"] = self.product_id
        return data


class InsufficientStock(SaleError):
    """
    Raised when a product cannot cover the requested quantity.

    ``available`` is the stock observed when the conditional decrement
    failed, which may be lower than what an earlier read reported.
    """

    code = "insufficient_stock"
    status_code = 409

    def __init__(self, product_id, requested, available, product_name=None):
        label = product_name or f"id {product_id}"
        super().__init__(
            f"Insufficient stock for product {label}. "
            f"Available: {available}, Requested: {requested}"
        )
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available

    def as_dict(self):
        data = super().as_dict()
        data.update(
            {
                "product_id": self.product_id,
                "requested": self.requested,
                "available": self.available,
            }
        )
        return data


class StorageFault(SaleError):
    """Raised when the store fails while committing; the sale was rolled back."""

    code = "storage_fault"
    status_code = 503

    def __init__(self, message="The sale could not be stored. Please retry."):
        super().__init__(message)
