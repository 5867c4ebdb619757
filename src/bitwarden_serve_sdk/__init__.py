"""
Bitwarden Serve Python SDK

Typed client for the local HTTP API of ``bw serve``.
Provides vault unlock/lock, typed item retrieval and error handling.
"""

from .client import BitwardenClient
from .server import BitwardenServer
from .exceptions import (
    BitwardenError,
    TransportError,
    SerializationError,
    DecodingError,
    NotFoundError,
    BadRequestError,
    WrongPasswordError,
    UnexpectedStatusError,
    WrongItemTypeError,
    NotALoginError,
    NotASecureNoteError,
    EmptyContentError,
    EmptyLoginError,
    EmptySecureNoteError,
    ServerStartupError,
)
from .models import Item, ItemType, Reprompt, Login, URI, Card, Identity, CustomField
from .config import ClientConfig, ServeConfig

__version__ = "1.0.0"

__all__ = [
    "BitwardenClient",
    "BitwardenServer",
    "BitwardenError",
    "TransportError",
    "SerializationError",
    "DecodingError",
    "NotFoundError",
    "BadRequestError",
    "WrongPasswordError",
    "UnexpectedStatusError",
    "WrongItemTypeError",
    "NotALoginError",
    "NotASecureNoteError",
    "EmptyContentError",
    "EmptyLoginError",
    "EmptySecureNoteError",
    "ServerStartupError",
    "Item",
    "ItemType",
    "Reprompt",
    "Login",
    "URI",
    "Card",
    "Identity",
    "CustomField",
    "ClientConfig",
    "ServeConfig",
]
