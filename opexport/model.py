"""
Export data model — the account → vault → item tree and its flat entries.

All models are frozen dataclasses with tuple sequences, so a loaded tree can
be shared between the renderer and the exporter without being mutated.
Matches the frozen-dataclass pattern in opexport.config.

Dict conversion produces the export interchange format:

    {"accounts": [{"accountName": ..., "vaults": [{"items": [...]}]}]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class URL:
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url}


@dataclass(frozen=True)
class Overview:
    title: str
    url: str | None = None
    urls: tuple[URL, ...] = ()
    tags: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "urls": [u.to_dict() for u in self.urls],
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class LoginField:
    type: str
    value: str | None = None
    name: str | None = None
    designation: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "name": self.name,
            "type": self.type,
            "designation": self.designation,
        }


@dataclass(frozen=True)
class ItemDetails:
    login_fields: tuple[LoginField, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"loginFields": [f.to_dict() for f in self.login_fields]}


@dataclass(frozen=True)
class Item:
    uuid: str
    created_at: str
    updated_at: str
    category_uuid: str
    overview: Overview
    details: ItemDetails = field(default_factory=ItemDetails)

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.uuid,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "categoryUuid": self.category_uuid,
            "overview": self.overview.to_dict(),
            "details": self.details.to_dict(),
        }


@dataclass(frozen=True)
class VaultAttributes:
    uuid: str
    name: str
    type: str  # P (personal), E (everyone), U (user-created)


@dataclass(frozen=True)
class Vault:
    attrs: VaultAttributes
    items: tuple[Item, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "uuid": self.attrs.uuid,
            "name": self.attrs.name,
            "type": self.attrs.type,
            "items": [i.to_dict() for i in self.items],
        }


@dataclass(frozen=True)
class AccountAttributes:
    name: str
    email: str
    uuid: str
    domain: str


@dataclass(frozen=True)
class Account:
    attrs: AccountAttributes
    vaults: tuple[Vault, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "accountName": self.attrs.name,
            "email": self.attrs.email,
            "uuid": self.attrs.uuid,
            "domain": self.attrs.domain,
            "vaults": [v.to_dict() for v in self.vaults],
        }


@dataclass(frozen=True)
class ExportData:
    """The full tree: every account with its vaults and their items."""

    accounts: tuple[Account, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"accounts": [a.to_dict() for a in self.accounts]}

    @property
    def item_count(self) -> int:
        return sum(len(v.items) for a in self.accounts for v in a.vaults)


# ─── Flat entries ────────────────────────────────────────────────────


@dataclass(frozen=True)
class AccountEntry:
    """An account row. Carries the attributes only; vaults follow as entries."""

    attrs: AccountAttributes

    @property
    def id(self) -> str:
        return self.attrs.uuid


@dataclass(frozen=True)
class VaultEntry:
    """A vault row, tagged with the id of the account that owns it."""

    attrs: VaultAttributes
    account_id: str

    @property
    def id(self) -> str:
        return self.attrs.uuid


@dataclass(frozen=True)
class ItemEntry:
    """An item row, tagged with the ids of its account and vault."""

    item: Item
    account_id: str
    vault_id: str

    @property
    def id(self) -> str:
        return self.item.uuid


Entry = AccountEntry | VaultEntry | ItemEntry
