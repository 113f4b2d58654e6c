"""Application-wide exception hierarchy.

Every failure the request pipeline knows how to turn into a response is a
:class:`StorefrontError`. The ``kind`` names the failure family and ends
up in the ``ErrKind`` field of JSON error envelopes.
"""

from typing import Optional


class StorefrontError(Exception):
    """Base application error."""

    kind = "app"
    status_code = 500

    def __init__(self, message: str, code: Optional[object] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.kind
        if status_code is not None:
            self.status_code = status_code


class StoreError(StorefrontError):
    """The relational store rejected a command or could not be reached."""

    kind = "store"


class AuthServiceError(StorefrontError):
    """The authentication service could not be reached or answered garbage."""

    kind = "auth_service"


class LoginRequired(StorefrontError):
    """The request carries no valid session."""

    kind = "login_required"
    status_code = 303


class InvalidRequest(StorefrontError):
    """Request data failed validation."""

    kind = "validation"
    status_code = 400


class NotFound(StorefrontError):
    """A lookup returned no rows."""

    kind = "not_found"
    status_code = 404


class FileStoreError(StorefrontError):
    """An upload could not be stored, listed, moved or removed."""

    kind = "file_store"


class PaymentError(StorefrontError):
    """The payment provider call failed."""

    kind = "payment"
