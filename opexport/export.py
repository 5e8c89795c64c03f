"""
Export filter — apply the exclusion set to the full tree and write it as JSON.

Filtering is non-cascading at the entry level: only entries whose own id is
excluded are removed from the flat sequence. Rebuilding the tree then drops the
subtree of any removed account or vault, because its children have no parent
left to attach to.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from opexport.codec import flatten, reconstruct
from opexport.exclusions import ExclusionSet
from opexport.model import Entry, ExportData

logger = logging.getLogger(__name__)


def filter_entries(entries: Iterable[Entry], exclusions: ExclusionSet) -> list[Entry]:
    """Drop entries whose own id is excluded. Never looks at ancestors."""
    return [e for e in entries if not exclusions.is_excluded(e)]


def filter_export_data(export_data: ExportData, exclusions: ExclusionSet) -> ExportData:
    """Return a new tree without the excluded nodes. Inputs are not modified."""
    return reconstruct(filter_entries(flatten(export_data), exclusions))


def to_json(export_data: ExportData) -> str:
    return json.dumps(export_data.to_dict(), separators=(",", ":"), ensure_ascii=False)


def save(export_data: ExportData, exclusions: ExclusionSet, path: str | Path) -> Path:
    """Filter ``export_data`` and write it to ``path``.

    Raises OSError if the file cannot be written. Nothing is retried.
    """
    filtered = filter_export_data(export_data, exclusions)
    out = Path(path)
    out.write_text(to_json(filtered), encoding="utf-8")
    logger.info(
        "Wrote %d accounts, %d items to %s (%d nodes excluded)",
        len(filtered.accounts),
        filtered.item_count,
        out,
        len(exclusions),
    )
    return out
