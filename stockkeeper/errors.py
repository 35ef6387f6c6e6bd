"""Error taxonomy for the product store.

Every failure is raised to the immediate caller; the store never logs an
error in place of raising it.
"""


class StoreError(Exception):
    """Base class for product store errors."""

    code = "STORE_ERROR"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class InitializationError(StoreError):
    """Raised when the durable collection cannot be opened or created."""

    code = "STORE_INIT_FAILED"


class StoreNotInitializedError(StoreError, RuntimeError):
    """Raised when an operation runs before ``initialize`` or after ``close``."""

    code = "STORE_NOT_INITIALIZED"

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Product store is not initialized (called {operation})")


class NotFoundError(StoreError, LookupError):
    """Raised by strict lookups when a product id is absent."""

    code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product '{product_id}' not found")


class ValidationError(StoreError, ValueError):
    """Raised when input cannot represent a product field at all."""

    code = "PRODUCT_INVALID"

    def __init__(self, detail: str, errors: list[dict] | None = None) -> None:
        self.errors = errors or []
        super().__init__(detail)


class StorageIOError(StoreError):
    """Raised when a read or write fails after initialization succeeded."""

    code = "STORAGE_IO_FAILED"


class ProductExistsError(StoreError):
    """Raised when restoring a product whose id is still in the collection."""

    code = "PRODUCT_EXISTS"

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product '{product_id}' is still in the collection")
