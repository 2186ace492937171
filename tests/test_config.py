"""Tests for application configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from docsite.config import AppConfig


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self) -> None:
        """Should create config with default values."""
        config = AppConfig()

        assert config.content_dir == Path("content")
        assert config.menu_file == Path("tmp/menu.json")
        assert config.extension == ".adoc"
        assert config.host == "127.0.0.1"
        assert config.port == 3333
        assert config.development is False
        assert config.asciidoctor == "asciidoctor"

    def test_custom_config(self) -> None:
        """Should create config with custom values."""
        config = AppConfig(
            content_dir=Path("/docs/content"),
            menu_file=Path("/docs/menu.json"),
            extension=".asciidoc",
            port=8080,
        )

        assert config.content_dir == Path("/docs/content")
        assert config.menu_file == Path("/docs/menu.json")
        assert config.extension == ".asciidoc"
        assert config.port == 8080

    def test_preview_url(self) -> None:
        """Should build the preview URL from host and port."""
        config = AppConfig(host="localhost", port=4000)

        assert config.preview_url == "http://localhost:4000"


class TestFromEnv:
    """Test AppConfig.from_env."""

    def test_empty_environment_uses_defaults(self) -> None:
        """Should fall back to defaults when nothing is set."""
        assert AppConfig.from_env({}) == AppConfig()

    def test_reads_host_port_and_env(self) -> None:
        """Should read HOST, PORT and NODE_ENV."""
        config = AppConfig.from_env({"HOST": "0.0.0.0", "PORT": "4000", "NODE_ENV": "development"})

        assert config.host == "0.0.0.0"
        assert config.port == 4000
        assert config.development is True

    def test_docsite_env_takes_precedence(self) -> None:
        """DOCSITE_ENV wins over NODE_ENV."""
        config = AppConfig.from_env({"DOCSITE_ENV": "production", "NODE_ENV": "development"})

        assert config.development is False

    def test_reads_paths(self) -> None:
        """Should read content dir, menu file and converter overrides."""
        config = AppConfig.from_env(
            {
                "DOCSITE_CONTENT_DIR": "/srv/content",
                "DOCSITE_MENU_FILE": "/srv/menu.json",
                "DOCSITE_ASCIIDOCTOR": "/usr/local/bin/asciidoctor",
            }
        )

        assert config.content_dir == Path("/srv/content")
        assert config.menu_file == Path("/srv/menu.json")
        assert config.asciidoctor == "/usr/local/bin/asciidoctor"

    def test_invalid_port(self) -> None:
        """Should reject a non-numeric port."""
        with pytest.raises(ValueError, match="Invalid PORT"):
            AppConfig.from_env({"PORT": "http"})


class TestResolvePaths:
    """Test path resolution helpers."""

    def test_resolve_absolute(self) -> None:
        """Should return absolute paths as-is."""
        config = AppConfig(content_dir=Path("/abs/content"), menu_file=Path("/abs/menu.json"))

        assert config.resolve_content_dir(Path("/base")) == Path("/abs/content")
        assert config.resolve_menu_file(Path("/base")) == Path("/abs/menu.json")

    def test_resolve_relative_no_base(self) -> None:
        """Should return relative path when no base_dir provided."""
        config = AppConfig()

        assert config.resolve_menu_file(None) == Path("tmp/menu.json")

    def test_resolve_relative_with_base(self) -> None:
        """Should resolve relative paths against base_dir."""
        config = AppConfig()
        base = Path("/project")

        assert config.resolve_content_dir(base) == Path("/project/content")
        assert config.resolve_menu_file(base) == Path("/project/tmp/menu.json")
