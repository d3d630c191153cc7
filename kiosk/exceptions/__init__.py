"""Custom exceptions for the Kiosk application."""


class KioskError(Exception):
    """Base exception for all application errors."""
    name = 'KioskError'

    def __init__(self, message="An internal error occurred", status_code=500, cause=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.cause = cause

    def to_dict(self):
        error = {'name': self.name, 'message': self.message}
        if self.cause is not None:
            error['cause'] = self.cause
        return {'success': False, 'error': error}


class NotFoundError(KioskError):
    """Exception raised when a resource is not found."""
    name = 'NotFound'

    def __init__(self, message="Resource not found", cause=None):
        super().__init__(message, 404, cause)


class ProductNotFoundError(NotFoundError):
    """Raised when a sale references a product id that does not exist."""
    name = 'ProductNotFound'

    def __init__(self, product_id):
        super().__init__(f"No existe el producto con el ID: {product_id}.")
        self.product_id = product_id


class DuplicateKeyError(KioskError):
    """Raised when a write violates a unique constraint."""
    name = 'DuplicateKey'

    def __init__(self, message="El registro ya existe. Violación de restricción única.", cause=None):
        super().__init__(message, 409, cause)


class ValidationError(KioskError):
    """Raised when an inbound request has the wrong shape."""
    name = 'ValidationError'

    def __init__(self, message, cause=None):
        super().__init__(message, 400, cause)


class BusinessLogicError(KioskError):
    """Exception raised for business logic violations."""
    name = 'BusinessLogicError'

    def __init__(self, message, status_code=400, cause=None):
        super().__init__(message, status_code, cause)


class InsufficientStockError(BusinessLogicError):
    """Raised when an operation fails due to lack of stock."""
    name = 'InsufficientStock'

    def __init__(self, product_name, required, available):
        message = (
            f"No se pudo crear la venta. Stock insuficiente para {product_name}: "
            f"se requieren {required}, disponible {available}"
        )
        super().__init__(message, status_code=409)
        self.required = required
        self.available = available


class StockUpdateConflictError(BusinessLogicError):
    """Raised when a stock update matched no row (concurrent modification)."""
    name = 'StockUpdateConflict'

    def __init__(self, product_id):
        super().__init__(
            f"Error al actualizar el stock del producto {product_id}.",
            status_code=409
        )
        self.product_id = product_id


class NotModifiedError(BusinessLogicError):
    """Raised when an update did not change any row."""
    name = 'NotModified'

    def __init__(self, message="No se efectuaron cambios."):
        super().__init__(message, status_code=400)


class StorageError(KioskError):
    """Raised for any other persistence failure."""
    name = 'StorageFailure'

    def __init__(self, message="Error de almacenamiento.", cause=None):
        super().__init__(message, 500, cause)
