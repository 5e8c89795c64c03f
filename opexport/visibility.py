"""
Visibility projection for the browsing view.

Children of an excluded account or vault are hidden while navigating, even
though they stay individually toggle-able and are only removed from the export
when they are excluded themselves (or lose their parent, see codec.reconstruct).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import assert_never

from opexport.exclusions import ExclusionSet
from opexport.model import AccountEntry, Entry, ItemEntry, VaultEntry


def project(flat: Iterable[Entry], exclusions: ExclusionSet) -> list[Entry]:
    """Return the subsequence of ``flat`` that should be shown."""
    visible: list[Entry] = []
    hide_account_subtree = False
    hide_vault_subtree = False

    for entry in flat:
        match entry:
            case AccountEntry():
                visible.append(entry)
                hide_account_subtree = exclusions.is_excluded(entry)
                hide_vault_subtree = False
            case VaultEntry():
                if hide_account_subtree:
                    continue
                visible.append(entry)
                hide_vault_subtree = exclusions.is_excluded(entry)
            case ItemEntry():
                if hide_account_subtree or hide_vault_subtree:
                    continue
                visible.append(entry)
            case _:
                assert_never(entry)

    return visible
