class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class InvalidStateError(DomainError):
    """Operation not allowed in the current state (past session, already cancelled...)"""

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class CapacityExceededError(DomainError):
    def __init__(self, message: str = 'No seats available for this session') -> None:
        super().__init__(message, 409)


class ValidationFailedError(DomainError):
    def __init__(self, errors: list, message: str = 'Validation failed') -> None:
        self.errors = errors
        super().__init__(message, 400)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)
