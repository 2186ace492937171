"""FastAPI application serving the rendered docs."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from docsite.config import AppConfig
from docsite.index.search import find_by_permalink, group_by_category
from docsite.index.storage import MenuDecodeError, MenuStore
from docsite.models import MenuIndex
from docsite.rendering.asciidoc import RenderError, render_document
from docsite.rendering.reload import RELOAD_PATH
from docsite.web.frontend import render_page

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="Docsite", version="0.1.0")
app.state.reload_version = 0


class ReloadStatus(BaseModel):
    version: int


def _get_config() -> AppConfig:
    return AppConfig.from_env()


def _menu_store(config: AppConfig) -> MenuStore:
    return MenuStore(config.resolve_menu_file(Path.cwd()))


def _load_menu(config: AppConfig) -> MenuIndex:
    """Load the menu file fresh for this request."""
    store = _menu_store(config)
    try:
        return store.load()
    except MenuDecodeError as exc:
        LOGGER.error("Menu unavailable: %s", exc)
        raise HTTPException(
            status_code=503,
            detail=f"Menu not available ({exc.reason}). Run 'docsite compile:docs' first.",
        ) from exc


def _page_context(config: AppConfig, menu: MenuIndex) -> Dict[str, Any]:
    return {
        "menu": group_by_category(menu),
        "development": config.development,
        "reload_url": RELOAD_PATH,
    }


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    config = _get_config()
    store = _menu_store(config)
    try:
        menu = store.load()
    except MenuDecodeError as exc:
        LOGGER.warning("Rendering home without menu: %s", exc)
        menu = MenuIndex()
    html = render_page("home.html", doc=None, **_page_context(config, menu))
    return HTMLResponse(content=html)


@app.get("/guides/{permalink}", response_class=HTMLResponse)
async def guide(permalink: str) -> HTMLResponse:
    config = _get_config()
    menu = _load_menu(config)
    doc = find_by_permalink(menu, permalink)
    if doc is None:
        raise HTTPException(status_code=404, detail=f"Guide not found: {permalink}")

    try:
        content = await asyncio.to_thread(
            render_document, doc["path"], executable=config.asciidoctor
        )
    except (RenderError, OSError) as exc:
        LOGGER.exception("Unable to render %s: %s", doc["path"], exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    html = render_page("docs.html", doc=doc, content=content, **_page_context(config, menu))
    return HTMLResponse(content=html)


@app.get("/api/menu")
async def menu_groups() -> dict[str, Dict[str, List[dict]]]:
    """Menu entries grouped by category, for navigation."""
    menu = _load_menu(_get_config())
    return {"menu": group_by_category(menu)}


@app.get(RELOAD_PATH)
async def reload_status() -> ReloadStatus:
    return ReloadStatus(version=app.state.reload_version)


@app.post(RELOAD_PATH)
async def trigger_reload() -> ReloadStatus:
    app.state.reload_version += 1
    LOGGER.debug("Reload requested, version %d", app.state.reload_version)
    return ReloadStatus(version=app.state.reload_version)
