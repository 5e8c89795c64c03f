"""Per-kind sets of ids the user has marked for removal from the export."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import assert_never

from opexport.model import AccountEntry, Entry, ItemEntry, VaultEntry


@dataclass
class ExclusionSet:
    """Excluded account, vault and item ids.

    Membership is per node: excluding a vault does not put its items in
    ``items``. Hiding descendants is the visibility projector's job.
    """

    accounts: set[str] = field(default_factory=set)
    vaults: set[str] = field(default_factory=set)
    items: set[str] = field(default_factory=set)

    def _bucket(self, entry: Entry) -> set[str]:
        match entry:
            case AccountEntry():
                return self.accounts
            case VaultEntry():
                return self.vaults
            case ItemEntry():
                return self.items
            case _:
                assert_never(entry)

    def is_excluded(self, entry: Entry) -> bool:
        return entry.id in self._bucket(entry)

    def toggle(self, entry: Entry) -> bool:
        """Flip the entry's membership. Returns True if it is now excluded."""
        bucket = self._bucket(entry)
        if entry.id in bucket:
            bucket.discard(entry.id)
            return False
        bucket.add(entry.id)
        return True

    def clear(self) -> None:
        self.accounts.clear()
        self.vaults.clear()
        self.items.clear()

    def __len__(self) -> int:
        return len(self.accounts) + len(self.vaults) + len(self.items)
