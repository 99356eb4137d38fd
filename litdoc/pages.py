"""Jinja2 rendering of per-file pages and the index page."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape
from jinja2 import TemplateError as JinjaTemplateError

from .errors import TemplateError
from .models import NavLink, RenderedSection

BUILTIN_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

PAGE_TEMPLATE = "page.html.j2"
INDEX_TEMPLATE = "index.html.j2"


class PageRenderer:
    """Fills the page and index templates.

    Templates in ``templates_dir`` take precedence over the bundled ones, so a
    project can override just ``page.html.j2`` and keep the stock index.
    """

    def __init__(self, templates_dir: Optional[Path] = None) -> None:
        search_path: List[str] = []
        if templates_dir is not None:
            search_path.append(str(templates_dir))
        search_path.append(str(BUILTIN_TEMPLATES_DIR))
        self._env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=select_autoescape(enabled_extensions=("html", "j2"), default_for_string=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_page(
        self,
        *,
        title: str,
        css_path: str,
        highlight_css_path: str,
        sections: Sequence[RenderedSection],
        sources: Sequence[NavLink],
        index_href: Optional[str] = None,
    ) -> str:
        return self._render(
            PAGE_TEMPLATE,
            title=title,
            css_path=css_path,
            highlight_css_path=highlight_css_path,
            sections=list(sections),
            sources=list(sources),
            index_href=index_href,
        )

    def render_index(self, *, title: str, css_path: str, sources: Sequence[NavLink]) -> str:
        return self._render(INDEX_TEMPLATE, title=title, css_path=css_path, sources=list(sources))

    def _render(self, template_name: str, **context: object) -> str:
        try:
            template = self._env.get_template(template_name)
        except TemplateNotFound as exc:
            raise TemplateError(f"Template not found: {template_name}") from exc
        try:
            return template.render(**context)
        except JinjaTemplateError as exc:
            raise TemplateError(f"Failed to render {template_name}: {exc}") from exc


__all__ = ["BUILTIN_TEMPLATES_DIR", "PageRenderer"]
