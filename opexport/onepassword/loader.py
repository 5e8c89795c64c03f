"""
Assemble the export tree from op CLI calls.

Every listed account gets every listed vault, and each vault gets the listed
items whose vault id matches. Each node is then enriched by its own `get`
call. Any failure aborts the whole load; nothing is retried. A set cancel
event stops the load before its next op call.
"""

from __future__ import annotations

import logging
import threading

from opexport.model import (
    URL,
    Account,
    AccountAttributes,
    ExportData,
    Item,
    ItemDetails,
    LoginField,
    Overview,
    Vault,
    VaultAttributes,
)
from opexport.onepassword import models as op_models
from opexport.onepassword.client import OPClient
from opexport.onepassword.errors import LoadCancelled

logger = logging.getLogger(__name__)


class ExportDataLoader:
    """Fetch accounts, vaults and items and shape them into an ExportData."""

    def __init__(
        self,
        client: OPClient | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        self.client = client or OPClient()
        self.cancel = cancel or threading.Event()
        self._listed_vaults: list[op_models.ListedVault] = []
        self._listed_items: list[op_models.ListedItem] = []

    def _checkpoint(self) -> None:
        if self.cancel.is_set():
            raise LoadCancelled("export data load cancelled")

    def load(self) -> ExportData:
        self._checkpoint()
        listed_accounts = self.client.list_accounts()
        self._checkpoint()
        self._listed_vaults = self.client.list_vaults()
        self._checkpoint()
        self._listed_items = self.client.list_items()
        logger.info(
            "Listed %d accounts, %d vaults, %d items",
            len(listed_accounts),
            len(self._listed_vaults),
            len(self._listed_items),
        )

        export_data = ExportData(accounts=tuple(self._account(a) for a in listed_accounts))
        logger.info("Loaded export data with %d items", export_data.item_count)
        return export_data

    def _account(self, listed: op_models.ListedAccount) -> Account:
        self._checkpoint()
        account = self.client.get_account(listed.user_uuid)
        return Account(
            attrs=AccountAttributes(
                name=account.name,
                email=listed.email,
                uuid=account.id,
                domain=account.domain,
            ),
            vaults=tuple(self._vault(v) for v in self._listed_vaults),
        )

    def _vault(self, listed: op_models.ListedVault) -> Vault:
        self._checkpoint()
        vault = self.client.get_vault(listed.id)
        return Vault(
            attrs=VaultAttributes(uuid=listed.id, name=listed.name, type=vault.type),
            items=tuple(self._item(i) for i in self._listed_items if i.vault.id == listed.id),
        )

    def _item(self, listed: op_models.ListedItem) -> Item:
        self._checkpoint()
        item = self.client.get_item(listed.id)
        urls = item.urls or []
        primary = next((u for u in urls if u.primary), None)

        return Item(
            uuid=listed.id,
            created_at=listed.created_at,
            updated_at=listed.updated_at,
            category_uuid=listed.category,
            overview=Overview(
                title=listed.title,
                url=(primary.href or "") if primary else None,
                urls=tuple(URL(url=u.href or "") for u in urls),
                tags=tuple(listed.tags or ()),
            ),
            details=ItemDetails(
                login_fields=tuple(
                    LoginField(
                        value=f.value,
                        name=f.label,
                        type=f.type,
                        designation=f.purpose,
                    )
                    for f in item.item_fields or []
                )
            ),
        )


def load_export_data(
    client: OPClient | None = None,
    cancel: threading.Event | None = None,
) -> ExportData:
    """Fetch the full tree. Raises an OPError subclass on any op failure and
    LoadCancelled once `cancel` is set."""
    return ExportDataLoader(client, cancel).load()
