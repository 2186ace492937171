"""Core docsite data models."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional

# Front-matter fields of one document plus the reserved ``path`` key.
DocumentMetadata = Dict[str, Any]

PATH_KEY = "path"


class MenuIndex:
    """Ordered collection of document metadata, at most one entry per path.

    Entries keep the order in which they were added. Updates happen in place
    and removals never reorder the remaining entries.
    """

    def __init__(self, entries: Iterable[DocumentMetadata] = ()) -> None:
        self._entries: List[DocumentMetadata] = []
        for entry in entries:
            self.upsert(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DocumentMetadata]:
        return iter(self._entries)

    def __contains__(self, path: object) -> bool:
        return self._position(path) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MenuIndex):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"MenuIndex({self._entries!r})"

    @property
    def paths(self) -> List[str]:
        return [entry[PATH_KEY] for entry in self._entries]

    def get(self, path: str) -> Optional[DocumentMetadata]:
        position = self._position(path)
        return None if position is None else self._entries[position]

    def upsert(self, entry: DocumentMetadata, *, merge: bool = False) -> str:
        """Insert ``entry`` or update the existing entry with the same path.

        With ``merge`` the new fields are copied onto the existing entry and
        keys absent from ``entry`` survive; otherwise the entry's fields are
        replaced while its position is kept.

        Returns ``"inserted"`` or ``"updated"``.
        """
        path = entry.get(PATH_KEY)
        if not isinstance(path, str):
            raise ValueError(f"Menu entry needs a string {PATH_KEY!r} field: {entry!r}")

        position = self._position(path)
        if position is None:
            self._entries.append(dict(entry))
            return "inserted"

        if merge:
            self._entries[position].update(entry)
        else:
            self._entries[position] = dict(entry)
        return "updated"

    def remove(self, path: str) -> Optional[DocumentMetadata]:
        """Drop the entry for ``path`` and return it, or None if unknown."""
        position = self._position(path)
        if position is None:
            return None
        return self._entries.pop(position)

    def to_list(self) -> List[DocumentMetadata]:
        return [dict(entry) for entry in self._entries]

    def _position(self, path: object) -> Optional[int]:
        for position, entry in enumerate(self._entries):
            if entry.get(PATH_KEY) == path:
                return position
        return None
