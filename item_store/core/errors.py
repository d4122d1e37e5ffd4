"""
Error taxonomy - every failure a caller can observe, with its HTTP status.
Challenge: Keep services free of HTTP concerns but give the API one place to map errors.
Design: Services raise these; item_store.main installs a single handler that renders {"detail": ...}.
"""

from fastapi import status


class ItemStoreError(Exception):
    """Base class. Subclasses set status_code; message is shown to the caller verbatim."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(ItemStoreError):
    """Malformed input, bad language code, empty update, no description."""

    status_code = status.HTTP_400_BAD_REQUEST


class TypeMismatchError(InvalidRequestError):
    """A known numeric field was given a non-numeric value."""


class NotFoundError(ItemStoreError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ItemStoreError):
    """Record already exists on create."""

    status_code = status.HTTP_409_CONFLICT


# --- Translation backend failures (never retried by the service) ---

class TranslationFailedError(ItemStoreError):
    """Generic translator failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UnsupportedLanguagePairError(TranslationFailedError):
    status_code = status.HTTP_400_BAD_REQUEST


class PayloadTooLargeError(TranslationFailedError):
    status_code = status.HTTP_400_BAD_REQUEST


class ServiceUnavailableError(TranslationFailedError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class RateLimitedError(TranslationFailedError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS


# --- Storage ---

class StorageError(ItemStoreError):
    """Unclassified storage failure. Surfaces as a generic internal error."""


class NestedPathUnsupportedError(StorageError):
    """Store cannot set a nested map entry, e.g. because the map attribute does not exist."""
