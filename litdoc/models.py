"""Core data models shared across litdoc components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .languages import Language


@dataclass(frozen=True)
class Section:
    """One documentation block and the code that follows it."""

    docs: str
    code: str


@dataclass(frozen=True)
class RenderedSection:
    """A section after Markdown rendering and code highlighting."""

    docs_html: str
    code_html: str


@dataclass(frozen=True)
class SourceFile:
    """A file selected for documentation."""

    path: Path
    relative_path: str
    language: Language


@dataclass(frozen=True)
class NavLink:
    """Entry in the jump-to menu and the index page."""

    title: str
    href: str


@dataclass
class PageResult:
    """Outcome of documenting a single source file."""

    source: str
    destination: Path
    section_count: int


@dataclass
class GenerationReport:
    """Summary of a full generation run."""

    output_dir: Path
    pages: List[PageResult] = field(default_factory=list)
    index: Optional[Path] = None
    assets: List[Path] = field(default_factory=list)
