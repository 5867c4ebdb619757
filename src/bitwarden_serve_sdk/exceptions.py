"""
Exception classes for Bitwarden Serve SDK.
"""

from typing import Optional, Union

from .models import ItemType


class BitwardenError(Exception):
    """Base exception for Bitwarden Serve SDK."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(BitwardenError):
    """Connection to the vault server failed."""
    pass


class SerializationError(BitwardenError):
    """Request body could not be encoded as JSON."""
    pass


class DecodingError(BitwardenError):
    """Response body could not be decoded into the expected shape."""
    pass


class NotFoundError(BitwardenError):
    """Resource not found."""

    def __init__(self, message: str = "item not found"):
        super().__init__(message, status_code=404)


class BadRequestError(BitwardenError):
    """Server rejected the request."""

    def __init__(self, message: str = "bad request"):
        super().__init__(message, status_code=400)


class WrongPasswordError(BadRequestError):
    """Master password was rejected by the unlock endpoint."""

    def __init__(self, message: str = "wrong password"):
        super().__init__(message)


class UnexpectedStatusError(BitwardenError):
    """Server answered with a status code the client does not handle."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        text = f"unexpected status code: {status_code}"
        if message:
            text = f"{text}: {message}"
        super().__init__(text, status_code=status_code)


class WrongItemTypeError(BitwardenError):
    """Item exists but is not of the requested kind."""

    def __init__(
        self,
        message: str,
        expected: Optional[ItemType] = None,
        actual: Optional[Union[ItemType, int]] = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NotALoginError(WrongItemTypeError):
    """Item is not a login."""

    def __init__(self, actual: Optional[Union[ItemType, int]] = None):
        super().__init__("item is not a login", expected=ItemType.LOGIN, actual=actual)


class NotASecureNoteError(WrongItemTypeError):
    """Item is not a secure note."""

    def __init__(self, actual: Optional[Union[ItemType, int]] = None):
        super().__init__(
            "item is not a secure note", expected=ItemType.SECURE_NOTE, actual=actual
        )


class EmptyContentError(BitwardenError):
    """Item has the requested kind but carries no payload."""
    pass


class EmptyLoginError(EmptyContentError):
    """Login item without login data."""

    def __init__(self, message: str = "login is empty"):
        super().__init__(message)


class EmptySecureNoteError(EmptyContentError):
    """Secure note item without notes."""

    def __init__(self, message: str = "secure note is empty"):
        super().__init__(message)


class ServerStartupError(BitwardenError):
    """The bw serve process could not be started or never became reachable."""
    pass
