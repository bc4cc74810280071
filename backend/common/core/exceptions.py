from contextlib import contextmanager
from typing import Iterator, Optional


class AppException(Exception):
    """Base application exception.

    Carries a machine-readable ``code`` that ends up in the error envelope.
    """

    default_code = "APP_ERROR"
    status_code = 500

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class NotFoundError(AppException):
    """Referenced entity absent."""

    default_code = "NOT_FOUND"
    status_code = 404


class DuplicateSubscriptionError(AppException):
    """An active subscription already exists for the user and subsector."""

    default_code = "DUPLICATE_SUBSCRIPTION"
    status_code = 409


class ValidationError(AppException):
    """Malformed input or enum value."""

    default_code = "VALIDATION_ERROR"
    status_code = 422


class StoreError(AppException):
    """Underlying data-access failure. The original error is kept as ``cause``."""

    default_code = "STORE_ERROR"
    status_code = 503

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, code)
        self.cause = cause


class NotImplementedFeatureError(AppException):
    """Operation explicitly unsupported in this deployment."""

    default_code = "NOT_IMPLEMENTED"
    status_code = 501


@contextmanager
def store_error_code(code: str) -> Iterator[None]:
    """Tag StoreErrors raised inside the block with an operation specific code."""
    try:
        yield
    except StoreError as e:
        if e.code == StoreError.default_code:
            e.code = code
        raise
