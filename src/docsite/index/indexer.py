"""Full rebuild of the menu index."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List

from docsite.config import DEFAULT_EXTENSION
from docsite.index.storage import MenuStore
from docsite.ingestion.frontmatter import FrontMatterError, extract_metadata
from docsite.models import PATH_KEY, DocumentMetadata, MenuIndex
from docsite.utils.files import iter_doc_paths

LOGGER = logging.getLogger(__name__)

Extractor = Callable[[Path], DocumentMetadata]


class BuildError(RuntimeError):
    """A rebuild was aborted; nothing was written."""

    def __init__(self, path: Path | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        where = f"{path}: " if path is not None else ""
        super().__init__(f"{where}{reason}")


@dataclass(slots=True)
class BuildStats:
    documents: int = 0
    processed_files: List[Path] = field(default_factory=list)


class Indexer:
    """Scans the content directory and writes a fresh menu file."""

    def __init__(
        self,
        content_dir: Path,
        store: MenuStore,
        *,
        extension: str = DEFAULT_EXTENSION,
        workers: int = 4,
        extractor: Extractor = extract_metadata,
    ) -> None:
        self.content_dir = Path(content_dir)
        self.store = store
        self.extension = extension
        self.workers = max(1, workers)
        self.extractor = extractor
        self.stats = BuildStats()

    def find_documents(self) -> List[Path]:
        """Find all document files under the content directory."""
        try:
            return list(iter_doc_paths(self.content_dir, self.extension))
        except OSError as exc:
            raise BuildError(self.content_dir, f"cannot scan content: {exc}") from exc

    def build(self) -> MenuIndex:
        """Rebuild the menu from scratch and persist it.

        Any extraction failure aborts the build before the store is touched.
        """
        paths = self.find_documents()
        if not paths:
            LOGGER.warning("No %s files found in %s", self.extension, self.content_dir)

        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            results = list(pool.map(self._extract, paths))

        by_path: Dict[str, DocumentMetadata] = {}
        for metadata in results:
            by_path[metadata[PATH_KEY]] = metadata

        menu = MenuIndex(by_path.values())
        try:
            self.store.save(menu)
        except OSError as exc:
            raise BuildError(self.store.menu_file, f"cannot write menu: {exc}") from exc

        self.stats = BuildStats(documents=len(menu), processed_files=paths)
        LOGGER.info("Indexed %d documents into %s", len(menu), self.store.menu_file)
        return menu

    def _extract(self, path: Path) -> DocumentMetadata:
        LOGGER.debug("Processing: %s", path)
        try:
            return self.extractor(path)
        except FrontMatterError as exc:
            raise BuildError(path, exc.reason) from exc
        except OSError as exc:
            raise BuildError(path, f"cannot read document: {exc}") from exc
