"""Turn segmented sections into HTML fragments."""

from __future__ import annotations

import html
from typing import List, Sequence

import markdown
from pygments import highlight as _pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

from .config import DEFAULT_MARKDOWN_EXTENSIONS
from .languages import Language
from .logging import get_logger
from .models import RenderedSection, Section

_logger = get_logger("render")


class SectionRenderer:
    """Renders docs through Markdown and code through Pygments, one pair per section."""

    def __init__(
        self,
        *,
        highlight: bool = True,
        style: str = "default",
        markdown_extensions: Sequence[str] = DEFAULT_MARKDOWN_EXTENSIONS,
    ) -> None:
        self.highlight = highlight
        self.style = style
        self.markdown_extensions = list(markdown_extensions)

    def render(self, sections: Sequence[Section], language: Language) -> List[RenderedSection]:
        """Return rendered sections in the same order as ``sections``."""
        # Converter, lexer and formatter are created per call so that worker
        # threads never share them.
        converter = markdown.Markdown(extensions=self.markdown_extensions)
        lexer = self._lexer_for(language)
        formatter = self._formatter()
        rendered: List[RenderedSection] = []
        for section in sections:
            converter.reset()
            rendered.append(
                RenderedSection(
                    docs_html=converter.convert(section.docs),
                    code_html=self._render_code(section.code, lexer, formatter),
                )
            )
        return rendered

    def render_docs(self, text: str) -> str:
        return markdown.markdown(text, extensions=self.markdown_extensions)

    def render_code(self, code: str, language: Language) -> str:
        return self._render_code(code, self._lexer_for(language), self._formatter())

    def stylesheet(self) -> str:
        """Return the Pygments CSS rules for the configured style."""
        return HtmlFormatter(style=self.style).get_style_defs(".highlight")

    def _formatter(self) -> HtmlFormatter:
        return HtmlFormatter(nowrap=True, style=self.style)

    @staticmethod
    def _render_code(code: str, lexer: Lexer | None, formatter: HtmlFormatter) -> str:
        code = code.rstrip("\n")
        if not code:
            return ""
        if lexer is None:
            return html.escape(code)
        return _pygments_highlight(code, lexer, formatter).rstrip("\n")

    def _lexer_for(self, language: Language) -> Lexer | None:
        if not self.highlight:
            return None
        try:
            return get_lexer_by_name(language.lexer_alias, stripnl=False, ensurenl=False)
        except ClassNotFound:
            _logger.debug("No Pygments lexer named %s; using plain text", language.lexer_alias)
            return TextLexer(stripnl=False, ensurenl=False)


__all__ = ["SectionRenderer"]
