"""Typed errors raised by the event store and mapped to HTTP responses."""


class EventStoreError(Exception):
    """Base class for every error an event operation can surface.

    ``status_code`` is the HTTP status the API layer answers with; the
    message is returned to the caller as ``detail``.
    """

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EventStoreError):
    """Missing or malformed input."""

    status_code = 400


class DuplicateError(EventStoreError):
    """A live event already has the same requestId, or the same title and date."""

    status_code = 400


class NotFoundError(EventStoreError):
    status_code = 404


class StoreError(EventStoreError):
    """The underlying document store failed. Never retried."""

    status_code = 500
