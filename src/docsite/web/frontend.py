"""HTML templates for the docsite web UI."""

from __future__ import annotations

from importlib.resources import files
from typing import Any

from jinja2 import Environment, FunctionLoader, select_autoescape
from jinja2.utils import htmlsafe_json_dumps
from markupsafe import Markup

from docsite.rendering.asciidoc import humanize


def _load_template(name: str) -> str | None:
    template = files("docsite.web").joinpath("templates", name)
    try:
        return template.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def _to_json(value: Any) -> Markup:
    return htmlsafe_json_dumps(value, default=str)


environment = Environment(
    loader=FunctionLoader(_load_template),
    autoescape=select_autoescape(["html"], default_for_string=True),
)
environment.filters["humanize"] = humanize
environment.filters["json"] = _to_json


def render_page(name: str, **context: Any) -> str:
    return environment.get_template(name).render(**context)
