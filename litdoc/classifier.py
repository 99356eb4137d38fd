"""Per-line comment/code classification.

Each line of a source file falls into exactly one of five cases, modelled as
small frozen dataclasses so the segmenter can dispatch on them exhaustively:

* :class:`Documentation` - a single-line comment, or the line that opens a
  multi-line comment (``opens_multiline`` is then true).
* :class:`ContinueMultiline` - a line inside an open multi-line comment.
* :class:`CloseMultiline` - the line that ends an open multi-line comment.
* :class:`Excluded` - a shebang or doc-comment line that is dropped.
* :class:`Code` - anything else, passed through unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .languages import Language


@dataclass(frozen=True)
class Documentation:
    text: str
    opens_multiline: bool = False


@dataclass(frozen=True)
class ContinueMultiline:
    text: str


@dataclass(frozen=True)
class CloseMultiline:
    text: str


@dataclass(frozen=True)
class Excluded:
    pass


@dataclass(frozen=True)
class Code:
    text: str


Classification = Union[Documentation, ContinueMultiline, CloseMultiline, Excluded, Code]

EXCLUDED = Excluded()


def is_excluded(language: Language, line: str) -> bool:
    """Return True for shebang lines and the language's doc-comment lines."""
    return language.comment_filter.search(line) is not None


def is_starting_multiline(language: Language, line: str) -> bool:
    matcher = language.multiline_start_matcher
    if matcher is None:
        return False
    return matcher.search(line) is not None and not is_excluded(language, line)


def is_ending_multiline(language: Language, line: str) -> bool:
    matcher = language.multiline_end_matcher
    if matcher is None:
        return False
    return matcher.search(line) is not None and not is_excluded(language, line)


def is_singleline(language: Language, line: str) -> bool:
    """Return True for single-line comments, including ``/* ... */`` on one line."""
    if is_excluded(language, line):
        return False
    if language.singleline_matcher.search(line) is not None:
        return True
    return is_starting_multiline(language, line) and is_ending_multiline(language, line)


def strip_multiline_start(language: Language, line: str) -> str:
    matcher = language.multiline_start_matcher
    return matcher.sub("", line) if matcher is not None else line


def strip_multiline_end(language: Language, line: str) -> str:
    matcher = language.multiline_end_matcher
    return matcher.sub("", line) if matcher is not None else line


def strip_singleline(language: Language, line: str) -> str:
    stripped = language.singleline_matcher.sub("", line, count=1)
    return strip_multiline_end(language, strip_multiline_start(language, stripped))


def classify(language: Language, line: str, *, in_multiline: bool) -> Classification:
    """Classify ``line`` under ``language`` given the current multi-line state."""
    if in_multiline:
        if is_ending_multiline(language, line):
            return CloseMultiline(strip_multiline_end(language, line))
        return ContinueMultiline(line)

    # The exclusion check must run first: `///` also matches `//`.
    if is_excluded(language, line):
        return EXCLUDED
    # Single-line wins over multi-line start so that `(* note *)` never
    # leaves the comment open.
    if is_singleline(language, line):
        return Documentation(strip_singleline(language, line))
    if is_starting_multiline(language, line):
        return Documentation(strip_multiline_start(language, line), opens_multiline=True)
    return Code(line)


def next_multiline_state(classification: Classification, in_multiline: bool) -> bool:
    """Return the multi-line flag that applies after ``classification``."""
    if isinstance(classification, CloseMultiline):
        return False
    if isinstance(classification, ContinueMultiline):
        return True
    if isinstance(classification, Documentation):
        return classification.opens_multiline
    if isinstance(classification, Excluded):
        return in_multiline
    return False


__all__ = [
    "Classification",
    "CloseMultiline",
    "Code",
    "ContinueMultiline",
    "Documentation",
    "EXCLUDED",
    "Excluded",
    "classify",
    "is_ending_multiline",
    "is_excluded",
    "is_singleline",
    "is_starting_multiline",
    "next_multiline_state",
]
