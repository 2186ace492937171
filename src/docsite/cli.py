"""Command line interface for docsite."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from docsite.config import AppConfig
from docsite.index.indexer import BuildError, Indexer
from docsite.index.storage import MenuDecodeError, MenuStore
from docsite.index.watcher import ChangeWatcher
from docsite.rendering.reload import PreviewNotifier
from docsite.web.app import app as web_app


console = Console()
app = typer.Typer(help="Docsite - AsciiDoc documentation website")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_config(content: Optional[Path], menu: Optional[Path]) -> AppConfig:
    config = AppConfig.from_env()
    if content is not None:
        config.content_dir = content
    if menu is not None:
        config.menu_file = menu
    return config


@app.command("compile:docs")
def compile_docs(
    watch: bool = typer.Option(False, "--watch", "-w", help="Watch files"),
    content: Path = typer.Option(None, "--content", help="Content directory with .adoc files"),
    menu: Path = typer.Option(None, "--menu", help="Menu file to generate"),
    reload: bool = typer.Option(
        True, "--reload/--no-reload", help="Ping the preview server after each change"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Compile docs and generate a menu file."""
    _setup_logging(verbose)
    config = _load_config(content, menu)
    content_dir = config.resolve_content_dir(Path.cwd())
    store = MenuStore(config.resolve_menu_file(Path.cwd()))
    indexer = Indexer(content_dir, store, extension=config.extension, workers=config.workers)

    try:
        built = indexer.build()
    except BuildError as exc:
        console.print(f"[red]Failed to generate menu file:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    console.print(
        f"[green]✔ Generated menu file[/green] [bold]{escape(str(store.menu_file))}[/bold] "
        f"({len(built)} documents)"
    )

    if watch:
        _watch(config, content_dir, store, reload=reload)


def _watch(config: AppConfig, content_dir: Path, store: MenuStore, *, reload: bool) -> None:
    console.print("Watching files for changes ...\n")
    try:
        menu = store.load()
    except MenuDecodeError as exc:
        console.print(f"[red]Cannot load menu file:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    notifier = PreviewNotifier(config.preview_url) if reload else None
    watcher = ChangeWatcher(
        content_dir,
        store,
        menu,
        extension=config.extension,
        notify=notifier,
        console=console,
    )
    try:
        watcher.run()
    except KeyboardInterrupt:
        console.print("Stopped watching.")
    finally:
        if notifier is not None:
            notifier.close()


@app.command()
def serve(
    host: str = typer.Option(None, help="Host interface (defaults to $HOST)"),
    port: int = typer.Option(None, help="Server port (defaults to $PORT)"),
) -> None:
    """Start the docs web server."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install it with \"python -m pip install uvicorn\""
        ) from exc

    config = AppConfig.from_env()
    host = host or config.host
    port = port or config.port
    menu_file = config.resolve_menu_file(Path.cwd())
    if not menu_file.exists():
        console.print("[yellow]Warning: menu file not found, run compile:docs first.[/yellow]")

    console.print(f"Starting docs server on http://{host}:{port} (menu: {menu_file})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
