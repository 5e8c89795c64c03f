"""
Root-level shared test fixtures.

Inherited by the core tests under tests/ and the per-package suites under
opexport/*/tests.
"""

from __future__ import annotations

import pytest

from opexport.config import reset_config
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


def _build_item(uuid: str, title: str | None = None, category: str = "001") -> Item:
    return Item(
        uuid=uuid,
        created_at="2023-01-02T03:04:05Z",
        updated_at="2023-02-03T04:05:06Z",
        category_uuid=category,
        overview=Overview(
            title=title or f"Item {uuid}",
            url="https://example.com",
            urls=(URL(url="https://example.com"),),
            tags=("work",),
        ),
        details=ItemDetails(
            login_fields=(
                LoginField(value="alice", name="username", type="STRING", designation="USERNAME"),
                LoginField(value="hunter2", name="password", type="CONCEALED", designation="PASSWORD"),
            )
        ),
    )


def _build_vault(uuid: str, items: tuple[Item, ...] = (), name: str | None = None) -> Vault:
    return Vault(
        attrs=VaultAttributes(uuid=uuid, name=name or f"Vault {uuid}", type="P"),
        items=items,
    )


def _build_account(uuid: str, vaults: tuple[Vault, ...] = (), name: str | None = None) -> Account:
    return Account(
        attrs=AccountAttributes(
            name=name or f"Account {uuid}",
            email=f"{uuid.lower()}@example.com",
            uuid=uuid,
            domain="my.1password.com",
        ),
        vaults=vaults,
    )


@pytest.fixture
def make_item():
    """Factory for items with two login fields, one URL and a tag."""
    return _build_item


@pytest.fixture
def make_vault():
    """Factory for personal vaults holding the given items."""
    return _build_vault


@pytest.fixture
def make_account():
    """Factory for accounts holding the given vaults."""
    return _build_account


@pytest.fixture
def small_tree() -> ExportData:
    """One account A, one vault V, two items I1 and I2."""
    return ExportData(
        accounts=(
            _build_account("A", (_build_vault("V", (_build_item("I1"), _build_item("I2"))),)),
        )
    )


@pytest.fixture
def wide_tree() -> ExportData:
    """Two accounts with two vaults each and a mix of empty and full vaults."""
    return ExportData(
        accounts=(
            _build_account(
                "A1",
                (
                    _build_vault("V1", (_build_item("I1"), _build_item("I2"))),
                    _build_vault("V2", ()),
                ),
            ),
            _build_account(
                "A2",
                (
                    _build_vault("V3", (_build_item("I3"),)),
                    _build_vault("V4", (_build_item("I4"), _build_item("I5"), _build_item("I6"))),
                ),
            ),
        )
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove op-export env vars that leak between tests."""
    for key in [
        "OPEXPORT_OP_BIN",
        "OPEXPORT_USE_CACHE",
        "OPEXPORT_TICK_INTERVAL",
        "OPEXPORT_LOG_LEVEL",
        "OPEXPORT_LOG_FILE",
    ]:
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()
