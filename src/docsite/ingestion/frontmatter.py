"""Front-matter extraction for content documents.

A document may start with a YAML block fenced by ``---`` lines::

    ---
    title: Intro
    category: guide
    permalink: intro
    ---
    = Intro

Only the header is parsed; the body is handed to the AsciiDoc converter
untouched at render time.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Tuple

import yaml

from docsite.models import PATH_KEY, DocumentMetadata
from docsite.utils.files import canonical_path

LOGGER = logging.getLogger(__name__)

DELIMITER = "---"


class FrontMatterError(ValueError):
    """Raised when a document's header block cannot be parsed."""

    def __init__(self, path: Path | str | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        where = f"{path}: " if path is not None else ""
        super().__init__(f"{where}{reason}")


def split_front_matter(text: str, path: Path | str | None = None) -> Tuple[str, str]:
    """Split ``text`` into ``(header, body)``.

    Text that does not open with a delimiter line has an empty header.
    """
    text = text.lstrip("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != DELIMITER:
        return "", text

    for index in range(1, len(lines)):
        if lines[index].rstrip() == DELIMITER:
            return "".join(lines[1:index]), "".join(lines[index + 1 :])

    raise FrontMatterError(path, "unterminated front matter block")


def parse_front_matter(header: str, path: Path | str | None = None) -> DocumentMetadata:
    """Parse the YAML header into a mapping of string keys."""
    if not header.strip():
        return {}

    try:
        data: Any = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        raise FrontMatterError(path, f"invalid front matter: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            path, f"front matter must be a mapping, got {type(data).__name__}"
        )
    return {str(key): value for key, value in data.items()}


def extract_metadata(path: Path) -> DocumentMetadata:
    """Read ``path`` and return its front matter tagged with the source path.

    The reserved ``path`` key always wins over a ``path`` declared in the header.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FrontMatterError(path, f"not valid UTF-8: {exc}") from exc
    header, _body = split_front_matter(text, path)
    metadata = parse_front_matter(header, path)
    if PATH_KEY in metadata:
        LOGGER.debug("Ignoring declared %r field in %s", PATH_KEY, path)
    metadata[PATH_KEY] = canonical_path(path)
    return metadata
