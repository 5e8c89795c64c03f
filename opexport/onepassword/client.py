"""Typed wrapper around the op subcommands the exporter needs."""

from __future__ import annotations

from opexport.config import OPConfig
from opexport.onepassword.models import (
    ListedAccount,
    ListedItem,
    ListedVault,
    OPAccount,
    OPItem,
    OPVault,
)
from opexport.onepassword.runner import run


class OPClient:
    """One method per op call. Every method may raise an OPError subclass."""

    def __init__(self, op: OPConfig | None = None) -> None:
        self.op = op

    def list_accounts(self) -> list[ListedAccount]:
        return run(["account", "list"], list[ListedAccount], self.op)

    def get_account(self, account_id: str) -> OPAccount:
        return run(["account", "get", "--account", account_id], OPAccount, self.op)

    def list_vaults(self) -> list[ListedVault]:
        return run(["vault", "list"], list[ListedVault], self.op)

    def get_vault(self, vault_id: str) -> OPVault:
        return run(["vault", "get", vault_id], OPVault, self.op)

    def list_items(self) -> list[ListedItem]:
        return run(["item", "list"], list[ListedItem], self.op)

    def get_item(self, item_id: str) -> OPItem:
        return run(["item", "get", item_id], OPItem, self.op)
