"""Comment syntax rules for every language litdoc can document."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from pathlib import PurePath
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

# Shebang lines and `#{` block markers are never documentation.
_BASE_FILTER = r"^#![/]|^\s*#\{"


@dataclass(frozen=True)
class Language:
    """Comment markers for a single language.

    ``singleline`` is required. ``multiline_start`` and ``multiline_end`` are
    set together or not at all. Lines starting with ``doc_marker`` (for example
    ``///`` XML doc comments) are dropped from the output entirely.
    """

    name: str
    singleline: str
    multiline_start: Optional[str] = None
    multiline_end: Optional[str] = None
    doc_marker: Optional[str] = None
    lexer: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.singleline:
            raise ValueError(f"Language '{self.name}' requires a single-line comment marker")
        if (self.multiline_start is None) != (self.multiline_end is None):
            raise ValueError(
                f"Language '{self.name}' must define both multi-line markers or neither"
            )

    @property
    def has_multiline(self) -> bool:
        return self.multiline_start is not None and self.multiline_end is not None

    @property
    def lexer_alias(self) -> str:
        return self.lexer or self.name

    @cached_property
    def singleline_matcher(self) -> re.Pattern[str]:
        return re.compile(r"^\s*" + re.escape(self.singleline) + r"\s?")

    @cached_property
    def multiline_start_matcher(self) -> Optional[re.Pattern[str]]:
        if self.multiline_start is None:
            return None
        return re.compile(r"^\s*" + re.escape(self.multiline_start) + r"\s?")

    @cached_property
    def multiline_end_matcher(self) -> Optional[re.Pattern[str]]:
        if self.multiline_end is None:
            return None
        # A marker followed by a quote sits inside a string literal.
        return re.compile(r"\s*" + re.escape(self.multiline_end) + r'(?!")')

    @cached_property
    def comment_filter(self) -> re.Pattern[str]:
        pattern = _BASE_FILTER
        if self.doc_marker:
            pattern += r"|^\s*" + re.escape(self.doc_marker)
        return re.compile(f"({pattern})")

    def describe(self) -> Dict[str, Optional[str]]:
        return {
            "name": self.name,
            "singleline": self.singleline,
            "multiline_start": self.multiline_start,
            "multiline_end": self.multiline_end,
            "doc_marker": self.doc_marker,
            "lexer": self.lexer_alias,
        }


def normalize_extension(extension: str) -> str:
    """Return ``extension`` lower-cased with a single leading dot."""
    cleaned = extension.strip().lower()
    if not cleaned:
        return ""
    return cleaned if cleaned.startswith(".") else f".{cleaned}"


class LanguageRegistry:
    """Immutable extension -> :class:`Language` table.

    Build one at startup and pass it to whatever needs to segment files. To add
    languages, call :meth:`extend`, which returns a new registry.
    """

    def __init__(self, languages: Mapping[str, Language]) -> None:
        table: Dict[str, Language] = {}
        for extension, language in languages.items():
            key = normalize_extension(extension)
            if not key:
                raise ValueError("Language extensions must not be empty")
            if key in table:
                raise ValueError(f"Duplicate language extension: {key}")
            table[key] = language
        self._languages: Mapping[str, Language] = MappingProxyType(table)

    def lookup(self, extension: str) -> Optional[Language]:
        """Return the rule for ``extension`` or ``None`` when it is unknown."""
        return self._languages.get(normalize_extension(extension))

    def for_path(self, path: str | PurePath) -> Optional[Language]:
        suffix = PurePath(path).suffix
        if not suffix:
            return None
        return self.lookup(suffix)

    def supports(self, path: str | PurePath) -> bool:
        return self.for_path(path) is not None

    def extensions(self) -> List[str]:
        return sorted(self._languages)

    def items(self) -> List[tuple[str, Language]]:
        return sorted(self._languages.items())

    def extend(self, languages: Mapping[str, Language]) -> "LanguageRegistry":
        """Return a new registry with ``languages`` added or overriding existing entries."""
        merged: Dict[str, Language] = dict(self._languages)
        for extension, language in languages.items():
            merged[normalize_extension(extension)] = language
        return LanguageRegistry(merged)

    def __contains__(self, extension: object) -> bool:
        if not isinstance(extension, str):
            return False
        return normalize_extension(extension) in self._languages

    def __iter__(self) -> Iterator[str]:
        return iter(self.extensions())

    def __len__(self) -> int:
        return len(self._languages)


_C_STYLE = {"singleline": "//", "multiline_start": "/*", "multiline_end": "*/"}

DEFAULT_REGISTRY = LanguageRegistry(
    {
        ".js": Language(name="javascript", **_C_STYLE),
        ".ts": Language(name="typescript", **_C_STYLE),
        ".fs": Language(
            name="fsharp",
            singleline="//",
            multiline_start="(*",
            multiline_end="*)",
            doc_marker="///",
        ),
        ".cs": Language(name="csharp", doc_marker="///", **_C_STYLE),
        ".vb": Language(name="vb.net", singleline="'", doc_marker="'''"),
        ".sql": Language(name="sql", singleline="--"),
        ".java": Language(name="java", **_C_STYLE),
        ".c": Language(name="c", **_C_STYLE),
        ".h": Language(name="c", **_C_STYLE),
        ".cpp": Language(name="cpp", **_C_STYLE),
        ".go": Language(name="go", **_C_STYLE),
        ".rs": Language(name="rust", doc_marker="///", **_C_STYLE),
        ".swift": Language(name="swift", doc_marker="///", **_C_STYLE),
        ".kt": Language(name="kotlin", **_C_STYLE),
        ".scala": Language(name="scala", **_C_STYLE),
        ".py": Language(name="python", singleline="#"),
        ".rb": Language(name="ruby", singleline="#"),
        ".sh": Language(name="bash", singleline="#"),
    }
)


__all__ = ["DEFAULT_REGISTRY", "Language", "LanguageRegistry", "normalize_extension"]
