"""
1Password CLI data source.

Public API:
    load_export_data(client)  → full ExportData tree
    OPClient                  → list/get accounts, vaults and items
    OPError and subclasses    → CommandError, DeserializeError, CLIError
    LoadCancelled             → raised by a load whose cancel event was set
"""

from __future__ import annotations

from opexport.onepassword.client import OPClient
from opexport.onepassword.errors import (
    CLIError,
    CommandError,
    DeserializeError,
    LoadCancelled,
    OPError,
)
from opexport.onepassword.loader import ExportDataLoader, load_export_data

__all__ = [
    "OPClient",
    "OPError",
    "CommandError",
    "DeserializeError",
    "CLIError",
    "LoadCancelled",
    "ExportDataLoader",
    "load_export_data",
]
