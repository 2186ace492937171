"""Read-side lookups over a loaded menu."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from docsite.models import DocumentMetadata

UNCATEGORIZED = "undefined"


def find_by_permalink(
    menu: Iterable[DocumentMetadata], permalink: str
) -> Optional[DocumentMetadata]:
    """Return the first entry whose ``permalink`` matches, or None."""
    for entry in menu:
        if entry.get("permalink") == permalink:
            return entry
    return None


def group_by_category(menu: Iterable[DocumentMetadata]) -> Dict[str, List[DocumentMetadata]]:
    """Group entries by ``category`` keeping menu order inside each group.

    Entries without a category land under ``"undefined"``.
    """
    groups: Dict[str, List[DocumentMetadata]] = {}
    for entry in menu:
        category = entry.get("category")
        key = UNCATEGORIZED if category is None else str(category)
        groups.setdefault(key, []).append(entry)
    return groups
