"""JSON persistence for the menu index."""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

from docsite.models import PATH_KEY, MenuIndex

LOGGER = logging.getLogger(__name__)


class MenuDecodeError(ValueError):
    """Raised when the menu artifact is missing or malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


def _json_default(value: Any) -> Any:
    # YAML front matter yields date objects for unquoted dates.
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def dumps_menu(menu: MenuIndex) -> str:
    return json.dumps(
        menu.to_list(),
        indent=2,
        sort_keys=True,
        ensure_ascii=False,
        default=_json_default,
    ) + "\n"


class MenuStore:
    """Reads and writes the menu artifact consumed by the web layer."""

    def __init__(self, menu_file: Path) -> None:
        self.menu_file = Path(menu_file)

    def exists(self) -> bool:
        return self.menu_file.is_file()

    def load(self) -> MenuIndex:
        try:
            raw = self.menu_file.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise MenuDecodeError(self.menu_file, "menu file not found") from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MenuDecodeError(self.menu_file, f"invalid JSON: {exc}") from exc

        if not isinstance(data, list):
            raise MenuDecodeError(self.menu_file, "expected a JSON array of entries")

        for position, entry in enumerate(data):
            if not isinstance(entry, dict):
                raise MenuDecodeError(self.menu_file, f"entry {position} is not an object")
            if not isinstance(entry.get(PATH_KEY), str):
                raise MenuDecodeError(
                    self.menu_file, f"entry {position} has no string {PATH_KEY!r}"
                )

        return MenuIndex(data)

    def _target_mode(self) -> int:
        # mkstemp creates 0600 files; keep the artifact readable like a normal write would.
        try:
            return stat.S_IMODE(os.stat(self.menu_file).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def save(self, menu: MenuIndex) -> None:
        """Write ``menu`` atomically: readers see the old or new file, never a mix."""
        payload = dumps_menu(menu)
        self.menu_file.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.menu_file.parent, prefix=f".{self.menu_file.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_name, self._target_mode())
            os.replace(tmp_name, self.menu_file)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
        LOGGER.debug("Saved %d menu entries to %s", len(menu), self.menu_file)
