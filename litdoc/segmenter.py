"""Split a source file into alternating documentation/code sections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from .classifier import (
    CloseMultiline,
    Code,
    ContinueMultiline,
    Documentation,
    Excluded,
    classify,
    next_multiline_state,
)
from .languages import Language
from .models import Section


@dataclass
class _Accumulator:
    """Running state of the fold over a file's lines."""

    sections: List[Section] = field(default_factory=list)
    has_code: bool = False
    in_multiline: bool = False
    docs: List[str] = field(default_factory=list)
    code: List[str] = field(default_factory=list)

    def flush(self) -> None:
        self.sections.append(Section(docs="".join(self.docs), code="".join(self.code)))
        self.docs = []
        self.code = []
        self.has_code = False

    def add_docs(self, text: str) -> None:
        self.docs.append(text + "\n")

    def add_code(self, text: str) -> None:
        self.code.append(text + "\n")
        self.has_code = True


def segment(language: Language, lines: Iterable[str]) -> List[Section]:
    """Return the sections of a file given its lines without terminators.

    A new section starts whenever documentation follows code. The last pending
    section is always emitted, so an empty file yields one empty section. An
    unterminated multi-line comment turns the rest of the file into docs.
    """
    state = _Accumulator()
    for line in lines:
        classification = classify(language, line, in_multiline=state.in_multiline)

        if isinstance(classification, Documentation):
            if state.has_code:
                state.flush()
            state.add_docs(classification.text)
        elif isinstance(classification, ContinueMultiline):
            state.add_docs(classification.text)
        elif isinstance(classification, CloseMultiline):
            # A bare closing marker adds no text of its own.
            if classification.text.strip():
                state.add_docs(classification.text)
        elif isinstance(classification, Code):
            state.add_code(classification.text)
        elif isinstance(classification, Excluded):
            # Shebangs and doc comments are dropped.
            pass

        state.in_multiline = next_multiline_state(classification, state.in_multiline)

    state.flush()
    return state.sections


def segment_text(language: Language, text: str) -> List[Section]:
    """Segment a whole file's contents.

    Only LF, CRLF and CR end a line. Form feeds and Unicode line separators
    stay part of the line they appear in.
    """
    return segment(language, split_lines(text))


def split_lines(text: str) -> List[str]:
    """Split ``text`` into lines without terminators, like a text-mode file."""
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


__all__ = ["segment", "segment_text", "split_lines"]
