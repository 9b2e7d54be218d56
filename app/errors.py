"""
Domain errors raised by the service layer.
The API layer turns them into `{"success": false, "message": ...}` responses.
"""


class AppError(Exception):
    """An expected failure with the HTTP status it should be answered with."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StoreNotFoundError(AppError):
    def __init__(self):
        super().__init__("Store not found", 404)


class ProductNotFoundError(AppError):
    def __init__(self):
        super().__init__("Product not found", 404)


class StorageUnavailableError(AppError):
    def __init__(self):
        super().__init__("Catalog storage is unavailable", 503)
