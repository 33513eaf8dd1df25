from fastapi import status
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError

# Failures raised by the record store driver. OSError covers refused and timed-out connections.
STORE_ERRORS = (SQLAlchemyError, OSError)


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StoreUnavailableError(ServiceError):
    """Raised when the record store cannot be reached."""

    def __init__(self, message: str = "Service Unavailable: record store is not connected") -> None:
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE)


def is_connection_error(exc: BaseException) -> bool:
    return isinstance(exc, (OperationalError, InterfaceError, OSError)) or bool(
        getattr(exc, "connection_invalidated", False)
    )


def store_error(exc: BaseException, message: str) -> ServiceError:
    """Connection failures become StoreUnavailableError (503); anything else a 500 carrying `message`."""
    if is_connection_error(exc):
        return StoreUnavailableError()
    return ServiceError(message)
