"""AsciiDoc documentation site: menu indexer, watcher and web renderer."""

__version__ = "0.1.0"
