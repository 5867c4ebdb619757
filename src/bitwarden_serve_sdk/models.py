"""
Data models for Bitwarden Serve SDK.

Items are decoded from the JSON the ``bw serve`` API returns. Keys are
camelCase on the wire and snake_case on the models. Every nested payload is
optional and the server does not keep the ``type`` tag consistent with them,
so nothing here fills in or drops a payload based on the tag.
"""

from datetime import datetime
from enum import IntEnum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ItemType(IntEnum):
    """Item type enumeration."""
    LOGIN = 1
    SECURE_NOTE = 2
    CARD = 3
    IDENTITY = 4


class Reprompt(IntEnum):
    """Whether the vault UI asks for the master password before showing the item."""
    NO = 0
    YES = 1


class VaultModel(BaseModel):
    """Base for immutable records decoded from vault responses."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class URI(VaultModel):
    """URI match rule of a login."""

    match: Optional[int] = Field(None, description="Match strategy marker")
    uri: Optional[str] = Field(None, description="URI to match")


class Login(VaultModel):
    """Login payload."""

    uris: List[URI] = Field(default_factory=list, description="URI match rules")
    username: Optional[str] = Field(None, description="Username")
    password: Optional[str] = Field(None, description="Password (sensitive)")
    totp: Optional[str] = Field(None, description="One-time password seed (sensitive)")

    @field_validator("uris", mode="before")
    @classmethod
    def uris_none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class Card(VaultModel):
    """Card payload."""

    card_holder_name: Optional[str] = None
    brand: Optional[str] = None
    number: Optional[str] = None
    exp_month: Optional[str] = None
    exp_year: Optional[str] = None
    code: Optional[str] = None


class Identity(VaultModel):
    title: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    address3: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    ssn: Optional[str] = None
    username: Optional[str] = None
    passport_number: Optional[str] = None
    license_number: Optional[str] = None


class CustomField(VaultModel):
    """Custom name/value field attached to an item."""

    name: Optional[str] = Field(None, description="Field name")
    value: Optional[str] = Field(None, description="Field value")
    # Opaque upstream; kept as the raw integer.
    type: int = Field(0, description="Field type marker")


class Item(VaultModel):
    """Vault item record."""

    id: Optional[str] = Field(None, description="Item identifier")
    creation_date: datetime = Field(..., description="Creation timestamp")
    revision_date: Optional[datetime] = Field(None, description="Last revision timestamp")
    deleted_date: Optional[datetime] = Field(None, description="Soft deletion timestamp")
    organization_id: Optional[str] = Field(None, description="Owning organization")
    collection_id: Optional[str] = Field(None, description="Collection identifier")
    folder_id: Optional[str] = Field(None, description="Folder identifier")
    # Unknown kinds (newer servers) are kept as plain ints.
    type: Union[ItemType, int] = Field(..., union_mode="left_to_right", description="Item type")
    name: Optional[str] = Field(None, description="Display name")
    notes: Optional[str] = Field(None, description="Free-text notes, secure note content")
    favorite: bool = Field(False, description="Whether the item is a favorite")
    fields: List[CustomField] = Field(default_factory=list, description="Custom fields")
    login: Optional[Login] = Field(None, description="Login payload")
    card: Optional[Card] = Field(None, description="Card payload")
    identity: Optional[Identity] = Field(None, description="Identity payload")
    reprompt: Union[Reprompt, int] = Field(
        Reprompt.NO, union_mode="left_to_right", description="Master password reprompt flag"
    )

    @field_validator("fields", mode="before")
    @classmethod
    def fields_none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_deleted(self) -> bool:
        """Whether the item sits in the trash."""
        return self.deleted_date is not None

    @property
    def content(self) -> Union[Login, Card, Identity, str, None]:
        """
        Payload selected by ``type``.

        Secure notes have no dedicated payload, their content is ``notes``.
        Returns None when the selected payload is absent, even if another
        payload happens to be present, and for kinds this SDK does not model.
        """
        if self.type == ItemType.LOGIN:
            return self.login
        if self.type == ItemType.SECURE_NOTE:
            return self.notes
        if self.type == ItemType.CARD:
            return self.card
        if self.type == ItemType.IDENTITY:
            return self.identity
        return None


class ItemResponse(VaultModel):
    """``{"data": Item}`` envelope of the item endpoint."""

    data: Item


class UnlockRequest(VaultModel):
    """Body of the unlock endpoint."""

    password: str
