class DomainException(Exception):
    pass


class StoreUnavailableError(DomainException):
    pass


class ProductNotFoundError(DomainException):
    pass


class OrderNotFoundError(DomainException):
    pass


class ValidationError(DomainException):
    pass


class AuthenticationError(DomainException):
    pass


class InsufficientStockError(DomainException):
    def __init__(self, available: int, required: int):
        self.available = available
        self.required = required
        super().__init__(f"Insufficient stock. Available: {available}, required: {required}")


class InvalidStatusTransitionError(DomainException):
    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(f"Order status cannot change from '{current.value}' to '{target.value}'")
