"""
Tree codec — flatten the account tree into entries and rebuild it.

flatten() is a preorder walk: each account, then for each of its vaults the
vault followed by its items. reconstruct() reverses it using the parent ids
carried by every vault and item entry, so an entry whose parent was filtered
out of the sequence is dropped instead of being attached to an unrelated
neighbour.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import assert_never

from opexport.model import (
    Account,
    AccountEntry,
    Entry,
    ExportData,
    Item,
    ItemEntry,
    Vault,
    VaultEntry,
)

logger = logging.getLogger(__name__)


def flatten(export_data: ExportData) -> list[Entry]:
    """Return every node of the tree in preorder. Exclusion-agnostic."""
    entries: list[Entry] = []
    for account in export_data.accounts:
        account_id = account.attrs.uuid
        entries.append(AccountEntry(attrs=account.attrs))
        for vault in account.vaults:
            vault_id = vault.attrs.uuid
            entries.append(VaultEntry(attrs=vault.attrs, account_id=account_id))
            for item in vault.items:
                entries.append(ItemEntry(item=item, account_id=account_id, vault_id=vault_id))
    return entries


class _VaultBuilder:
    def __init__(self, entry: VaultEntry) -> None:
        self.attrs = entry.attrs
        self.items: list[Item] = []

    def build(self) -> Vault:
        return Vault(attrs=self.attrs, items=tuple(self.items))


class _AccountBuilder:
    def __init__(self, entry: AccountEntry) -> None:
        self.attrs = entry.attrs
        self.vaults: list[_VaultBuilder] = []
        self.vaults_by_id: dict[str, _VaultBuilder] = {}

    def build(self) -> Account:
        return Account(attrs=self.attrs, vaults=tuple(v.build() for v in self.vaults))


def reconstruct(entries: Iterable[Entry]) -> ExportData:
    """Rebuild a tree from entries produced by flatten() (possibly filtered).

    Vaults attach to the account named by ``account_id`` and items to the vault
    named by ``(account_id, vault_id)``. When several parents share an id, the
    most recent one in the sequence wins. Orphans are dropped.
    """
    accounts: list[_AccountBuilder] = []
    accounts_by_id: dict[str, _AccountBuilder] = {}
    orphans = 0

    for entry in entries:
        match entry:
            case AccountEntry():
                builder = _AccountBuilder(entry)
                accounts.append(builder)
                accounts_by_id[entry.id] = builder
            case VaultEntry():
                account = accounts_by_id.get(entry.account_id)
                if account is None:
                    orphans += 1
                    continue
                vault = _VaultBuilder(entry)
                account.vaults.append(vault)
                account.vaults_by_id[entry.id] = vault
            case ItemEntry():
                account = accounts_by_id.get(entry.account_id)
                vault = account.vaults_by_id.get(entry.vault_id) if account else None
                if vault is None:
                    orphans += 1
                    continue
                vault.items.append(entry.item)
            case _:
                assert_never(entry)

    if orphans:
        logger.debug("Dropped %d entries whose parent is not in the sequence", orphans)

    return ExportData(accounts=tuple(a.build() for a in accounts))
