"""Exception types raised by litdoc outside the segmentation core."""

from __future__ import annotations


class LitdocError(RuntimeError):
    """Base class for recoverable litdoc failures reported to the user."""


class ConfigError(LitdocError):
    """Raised when the configuration file cannot be parsed."""


class UnsupportedLanguageError(LitdocError):
    """Raised when a file has no registered comment syntax."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No language registered for {path}")
        self.path = path


class TemplateError(LitdocError):
    """Raised when a page template cannot be loaded or rendered."""


__all__ = ["ConfigError", "LitdocError", "TemplateError", "UnsupportedLanguageError"]
