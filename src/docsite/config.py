"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_EXTENSION = ".adoc"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3333


def _is_development(environ: Mapping[str, str]) -> bool:
    env = environ.get("DOCSITE_ENV") or environ.get("NODE_ENV") or ""
    return env.strip().lower() == "development"


@dataclass(slots=True)
class AppConfig:
    content_dir: Path = Path("content")
    menu_file: Path = Path("tmp/menu.json")
    extension: str = DEFAULT_EXTENSION
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    development: bool = False
    asciidoctor: str = "asciidoctor"
    workers: int = 4

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Build a config from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()

        raw_port = env.get("PORT")
        try:
            port = int(raw_port) if raw_port else defaults.port
        except ValueError as exc:
            raise ValueError(f"Invalid PORT value: {raw_port!r}") from exc

        return cls(
            content_dir=Path(env.get("DOCSITE_CONTENT_DIR") or defaults.content_dir),
            menu_file=Path(env.get("DOCSITE_MENU_FILE") or defaults.menu_file),
            host=env.get("HOST") or defaults.host,
            port=port,
            development=_is_development(env),
            asciidoctor=env.get("DOCSITE_ASCIIDOCTOR") or defaults.asciidoctor,
        )

    @property
    def preview_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def resolve_content_dir(self, base_dir: Path | None = None) -> Path:
        return _resolve(Path(self.content_dir), base_dir)

    def resolve_menu_file(self, base_dir: Path | None = None) -> Path:
        return _resolve(Path(self.menu_file), base_dir)


def _resolve(path: Path, base_dir: Path | None) -> Path:
    if path.is_absolute() or base_dir is None:
        return path
    return base_dir / path
