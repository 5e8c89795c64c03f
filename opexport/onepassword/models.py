"""Response models for `op ... --format json`. Unknown keys are ignored."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OnlyID(BaseModel):
    """Nested reference that only carries an id (e.g. an item's vault)."""

    id: str


# op account list
class ListedAccount(BaseModel):
    url: str
    email: str
    user_uuid: str
    account_uuid: str | None = None
    shorthand: str | None = None


# op account get --account <id>
class OPAccount(BaseModel):
    id: str
    name: str
    domain: str
    type: str | None = None
    state: str | None = None
    created_at: str | None = None


# op vault list
class ListedVault(BaseModel):
    id: str
    name: str


# op vault get <id>
class OPVault(ListedVault):
    type: str
    attribute_version: int | None = None
    content_version: int | None = None
    items: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


# op item list
class ListedItem(BaseModel):
    id: str
    title: str
    vault: OnlyID
    category: str
    tags: list[str] | None = None
    version: int | None = None
    last_edited_by: str | None = None
    created_at: str
    updated_at: str


class PasswordDetails(BaseModel):
    entropy: int | None = None
    generated: bool | None = None
    strength: str | None = None


class ItemField(BaseModel):
    id: str
    type: str
    purpose: str | None = None
    label: str | None = None
    value: str | None = None
    entropy: float | None = None
    password_details: PasswordDetails | None = None


class ItemURL(BaseModel):
    primary: bool | None = None
    href: str | None = None


# op item get <id>
class OPItem(ListedItem):
    model_config = ConfigDict(populate_by_name=True)

    sections: list[OnlyID] | None = None
    item_fields: list[ItemField] | None = Field(default=None, alias="fields")
    urls: list[ItemURL] | None = None
