"""AsciiDoc to HTML conversion.

Conversion is delegated to the ``asciidoctor`` executable; the document is
fed on stdin and the embeddable HTML fragment is read back from stdout.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import Sequence

LOGGER = logging.getLogger(__name__)

DOCTYPE = "article"
DEFAULT_ATTRIBUTES: tuple[str, ...] = (
    "icons=font",
    "skip-front-matter=true",
    "sectlinks",
    "sectanchors",
    "linkattrs",
    "toc=macro",
    "toclevels=1",
)


class RenderError(RuntimeError):
    """Raised when a document cannot be converted."""


def build_command(
    executable: str = "asciidoctor",
    attributes: Sequence[str] = DEFAULT_ATTRIBUTES,
) -> list[str]:
    command = [executable, "--no-header-footer", "--doctype", DOCTYPE, "--backend", "html5"]
    for attribute in attributes:
        command.extend(["--attribute", attribute])
    command.extend(["--out-file", "-", "-"])
    return command


def render_text(
    text: str,
    *,
    executable: str = "asciidoctor",
    attributes: Sequence[str] = DEFAULT_ATTRIBUTES,
) -> str:
    command = build_command(executable, attributes)
    try:
        completed = subprocess.run(
            command,
            input=text,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=False,
        )
    except FileNotFoundError as exc:
        raise RenderError(f"AsciiDoc converter not found: {executable}") from exc

    if completed.returncode != 0:
        detail = completed.stderr.strip() or f"exit status {completed.returncode}"
        raise RenderError(f"AsciiDoc conversion failed: {detail}")
    if completed.stderr.strip():
        LOGGER.warning("asciidoctor: %s", completed.stderr.strip())
    return completed.stdout


def render_document(
    path: Path | str,
    *,
    executable: str = "asciidoctor",
    attributes: Sequence[str] = DEFAULT_ATTRIBUTES,
) -> str:
    """Convert the AsciiDoc file at ``path`` into an HTML fragment."""
    text = Path(path).read_text(encoding="utf-8")
    return render_text(text, executable=executable, attributes=attributes)


_FIRST_HYPHEN_WORD = re.compile(r"-(\w)")


def humanize(value: str) -> str:
    """``getting-started`` -> ``Getting Started``.

    Only the first hyphenated word is split, matching existing category slugs.
    """
    value = _FIRST_HYPHEN_WORD.sub(lambda match: f" {match.group(1).upper()}", value, count=1)
    return value[:1].upper() + value[1:]
