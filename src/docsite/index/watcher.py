"""Incremental menu updates driven by file-system events."""

from __future__ import annotations

import logging
import os
import queue
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, Optional

from rich.console import Console
from rich.markup import escape
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from docsite.config import DEFAULT_EXTENSION
from docsite.index.storage import MenuStore
from docsite.ingestion.frontmatter import FrontMatterError, extract_metadata
from docsite.models import DocumentMetadata, MenuIndex
from docsite.utils.files import canonical_path, is_doc_file, relative_display_path

LOGGER = logging.getLogger(__name__)

EventKind = Literal["modify", "remove"]


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    kind: EventKind
    path: Path


class QueueingHandler(FileSystemEventHandler):
    """Turns watchdog callbacks into ChangeEvents on a queue."""

    def __init__(self, events: "queue.Queue[ChangeEvent]", extension: str = DEFAULT_EXTENSION) -> None:
        super().__init__()
        self.events = events
        self.extension = extension

    def on_created(self, event: FileSystemEvent) -> None:
        self._push("modify", event.src_path, event)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._push("modify", event.src_path, event)

    def on_deleted(self, event: FileSystemEvent) -> None:
        self._push("remove", event.src_path, event)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._push("remove", event.src_path, event)
        self._push("modify", getattr(event, "dest_path", ""), event)

    def _push(self, kind: EventKind, raw_path: str | bytes, event: FileSystemEvent) -> None:
        if event.is_directory or not raw_path:
            return
        path = Path(os.fsdecode(raw_path))
        if not is_doc_file(path, self.extension):
            return
        self.events.put(ChangeEvent(kind, path))


class ChangeWatcher:
    """Keeps a loaded MenuIndex and its menu file in sync with the content tree.

    Events are handled strictly one after another so two saves never overlap.
    A document that fails to parse is reported and skipped; the watcher keeps
    running.
    """

    def __init__(
        self,
        content_dir: Path,
        store: MenuStore,
        menu: MenuIndex,
        *,
        extension: str = DEFAULT_EXTENSION,
        notify: Optional[Callable[[], None]] = None,
        console: Optional[Console] = None,
        merge: bool = False,
        extractor: Callable[[Path], DocumentMetadata] = extract_metadata,
        observer_factory: Callable[[], Observer] = Observer,
    ) -> None:
        self.content_dir = Path(content_dir)
        self.store = store
        self.menu = menu
        self.extension = extension
        self.notify = notify
        self.console = console or Console()
        self.merge = merge
        self.extractor = extractor
        self.observer_factory = observer_factory
        self.events: "queue.Queue[ChangeEvent]" = queue.Queue()
        self.handler = QueueingHandler(self.events, extension)

    def handle(self, event: ChangeEvent) -> bool:
        """Apply one event. Returns True when the menu file was rewritten."""
        if event.kind == "remove":
            return self.on_removed(event.path)
        return self.on_modified(event.path)

    def on_modified(self, path: Path) -> bool:
        display = relative_display_path(path, self.content_dir)
        self.console.print(f"[magenta]changed:[/magenta]   {escape(display)}")
        try:
            metadata = self.extractor(path)
        except FrontMatterError as exc:
            LOGGER.error("Skipping %s: %s", display, exc.reason)
            return False
        except OSError as exc:
            LOGGER.error("Cannot read %s: %s", display, exc)
            return False

        status = self.menu.upsert(metadata, merge=self.merge)
        LOGGER.debug("Menu entry %s for %s", status, display)
        return self._persist()

    def on_removed(self, path: Path) -> bool:
        display = relative_display_path(path, self.content_dir)
        self.console.print(f"[red]{escape(display)} file removed[/red]")
        if self.menu.remove(canonical_path(path)) is None:
            LOGGER.debug("%s was not in the menu", display)
        return self._persist()

    def process_pending(self) -> int:
        """Handle every queued event without blocking; returns how many ran."""
        handled = 0
        while True:
            try:
                event = self.events.get_nowait()
            except queue.Empty:
                return handled
            self.handle(event)
            handled += 1

    def run(self, stop: Optional[threading.Event] = None, *, poll_interval: float = 0.5) -> None:
        """Observe the content directory until ``stop`` is set."""
        observer = self.observer_factory()
        observer.schedule(self.handler, str(self.content_dir), recursive=True)
        observer.start()
        LOGGER.info("Watching %s for changes", self.content_dir)
        try:
            while stop is None or not stop.is_set():
                try:
                    event = self.events.get(timeout=poll_interval)
                except queue.Empty:
                    continue
                self.handle(event)
        finally:
            observer.stop()
            observer.join()

    def _persist(self) -> bool:
        try:
            self.store.save(self.menu)
        except OSError as exc:
            LOGGER.error("Failed to write %s: %s", self.store.menu_file, exc)
            return False
        if self.notify is not None:
            self.notify()
        return True
