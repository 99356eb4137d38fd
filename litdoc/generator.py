"""End-to-end documentation generation for a set of source files."""

from __future__ import annotations

import shutil
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence

from .config import LitdocConfig
from .errors import UnsupportedLanguageError
from .languages import DEFAULT_REGISTRY, LanguageRegistry
from .logging import get_logger
from .models import GenerationReport, NavLink, PageResult, SourceFile
from .pages import PageRenderer
from .paths import destination_for, path_to_root, relative_link
from .render import SectionRenderer
from .scanner import SourceScanner
from .segmenter import segment

STATIC_DIR = Path(__file__).resolve().parent / "static"
STYLESHEET = "litdoc.css"
HIGHLIGHT_STYLESHEET = "pygments.css"
INDEX_PAGE = "index.html"


class Generator:
    """Coordinates scanning, segmentation, rendering and writing of pages."""

    def __init__(
        self,
        config: LitdocConfig,
        *,
        registry: LanguageRegistry | None = None,
        renderer: SectionRenderer | None = None,
        pages: PageRenderer | None = None,
        scanner: SourceScanner | None = None,
    ) -> None:
        self.config = config
        base = registry or DEFAULT_REGISTRY
        self.registry = base.extend(config.languages) if config.languages else base
        self.renderer = renderer or SectionRenderer(
            highlight=config.highlight,
            style=config.pygments_style,
            markdown_extensions=config.markdown_extensions,
        )
        self.pages = pages or PageRenderer(config.templates_dir)
        self.scanner = scanner or SourceScanner(self.registry)
        self.logger = get_logger("generator")

    def generate(self, targets: Sequence[str] = (), *, root: Path | None = None) -> GenerationReport:
        """Document every file under ``root`` matching ``targets``."""
        source_root = (root or self.config.root).resolve()
        output_dir = self.config.output_dir
        self.logger.info("Generating documentation for %s into %s", source_root, output_dir)

        sources = self.scanner.scan(
            source_root,
            list(targets),
            exclude=self.config.exclude_paths,
            skip_dirs=[output_dir],
        )
        output_dir.mkdir(parents=True, exist_ok=True)
        report = GenerationReport(output_dir=output_dir)
        report.assets = self._write_assets(output_dir)

        if not sources:
            self.logger.warning("No documentable files matched %s", ", ".join(targets) or "any target")
            return report

        self.logger.debug("Documenting %d files with %d workers", len(sources), self.config.workers)
        if self.config.workers <= 1 or len(sources) == 1:
            report.pages = [self.document_file(source, sources) for source in sources]
        else:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                report.pages = list(pool.map(lambda source: self.document_file(source, sources), sources))

        if self.config.index:
            report.index = self._write_index(sources)

        self.logger.info(
            "Successfully processed %d files: %s",
            len(report.pages),
            ", ".join(page.source for page in report.pages),
        )
        return report

    def document_file(self, source: SourceFile, sources: Sequence[SourceFile] = ()) -> PageResult:
        """Segment, render and write the page for a single source file."""
        language = self.registry.for_path(source.path)
        if language is None:
            raise UnsupportedLanguageError(source.relative_path)

        # Undecodable bytes are replaced with U+FFFD.
        with source.path.open("r", encoding="utf-8", errors="replace", newline=None) as handle:
            lines = [line.rstrip("\n") for line in handle]

        sections = segment(language, lines)
        rendered = self.renderer.render(sections, language)

        destination = self._destination(source)
        root_prefix = path_to_root(destination, self.config.output_dir)
        html = self.pages.render_page(
            title=Path(source.relative_path).name,
            css_path=f"{root_prefix}{STYLESHEET}",
            highlight_css_path=f"{root_prefix}{HIGHLIGHT_STYLESHEET}",
            sections=rendered,
            sources=self._nav_links(destination, sources or [source]),
            index_href=f"{root_prefix}{INDEX_PAGE}" if self.config.index else None,
        )

        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(html, encoding="utf-8")
        self.logger.debug("Wrote %s (%d sections)", destination, len(sections))
        return PageResult(
            source=source.relative_path,
            destination=destination,
            section_count=len(sections),
        )

    def _destination(self, source: SourceFile) -> Path:
        return destination_for(
            source.relative_path,
            self.config.output_dir,
            keep_extension=self.config.keep_extension,
        )

    def _nav_links(self, from_page: Path, sources: Sequence[SourceFile]) -> List[NavLink]:
        return [
            NavLink(title=source.relative_path, href=relative_link(from_page, self._destination(source)))
            for source in sources
        ]

    def _write_index(self, sources: Sequence[SourceFile]) -> Path:
        index_path = self.config.output_dir / INDEX_PAGE
        html = self.pages.render_index(
            title=self.config.index_title,
            css_path=STYLESHEET,
            sources=self._nav_links(index_path, sources),
        )
        index_path.write_text(html, encoding="utf-8")
        return index_path

    def _write_assets(self, output_dir: Path) -> List[Path]:
        stylesheet = output_dir / STYLESHEET
        shutil.copyfile(STATIC_DIR / STYLESHEET, stylesheet)
        highlight = output_dir / HIGHLIGHT_STYLESHEET
        highlight.write_text(self.renderer.stylesheet(), encoding="utf-8")
        return [stylesheet, highlight]


def generate(
    config: LitdocConfig,
    targets: Sequence[str] = (),
    *,
    registry: Optional[LanguageRegistry] = None,
) -> GenerationReport:
    """Convenience wrapper around :class:`Generator`."""
    return Generator(config, registry=registry).generate(targets)


__all__ = ["Generator", "generate"]
