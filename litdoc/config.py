"""Configuration loading for litdoc (.litdoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError
from .languages import Language, normalize_extension

CONFIG_FILENAME = ".litdoc.yml"

DEFAULT_MARKDOWN_EXTENSIONS = ("fenced_code", "tables", "sane_lists")


@dataclass
class LitdocConfig:
    """Represents the settings defined in .litdoc.yml."""

    root: Path
    output_dir: Path
    workers: int = 4
    highlight: bool = True
    pygments_style: str = "default"
    templates_dir: Optional[Path] = None
    index: bool = True
    title: Optional[str] = None
    keep_extension: bool = False
    exclude_paths: List[str] = field(default_factory=list)
    markdown_extensions: List[str] = field(
        default_factory=lambda: list(DEFAULT_MARKDOWN_EXTENSIONS)
    )
    languages: Dict[str, Language] = field(default_factory=dict)

    @classmethod
    def defaults(cls, root: Path) -> "LitdocConfig":
        root = root.resolve()
        return cls(root=root, output_dir=root / "docs")

    @property
    def index_title(self) -> str:
        return self.title or self.root.name or "Documentation"


def load_config(config_path: Path) -> LitdocConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()
    config = LitdocConfig.defaults(root)

    if not config_file.exists():
        return config

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_dir = _as_str(data.get("output_dir"))
    if output_dir:
        config.output_dir = (root / output_dir).resolve()

    workers = _as_int(data.get("workers"))
    if workers is not None:
        if workers < 1:
            raise ConfigError("workers must be at least 1")
        config.workers = workers

    highlight = _as_bool(data.get("highlight"))
    if highlight is not None:
        config.highlight = highlight

    style = _as_str(data.get("pygments_style"))
    if style:
        config.pygments_style = style

    templates_dir = _as_str(data.get("templates_dir"))
    if templates_dir:
        config.templates_dir = root / templates_dir

    index = _as_bool(data.get("index"))
    if index is not None:
        config.index = index

    config.title = _as_str(data.get("title"))

    keep_extension = _as_bool(data.get("keep_extension"))
    if keep_extension is not None:
        config.keep_extension = keep_extension

    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    if "markdown_extensions" in data:
        config.markdown_extensions = _as_str_list(data.get("markdown_extensions"))

    config.languages = _parse_languages(data.get("languages"))
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _parse_languages(value: Any) -> Dict[str, Language]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError("languages must be a mapping of extension to comment markers")

    languages: Dict[str, Language] = {}
    for raw_extension, entry in value.items():
        extension = normalize_extension(str(raw_extension))
        if not extension:
            raise ConfigError("Language extensions must not be empty")
        entry_data = _as_dict(entry)
        singleline = _as_str(entry_data.get("singleline"))
        if not singleline:
            raise ConfigError(f"Language {extension} requires a singleline marker")
        try:
            languages[extension] = Language(
                name=_as_str(entry_data.get("name")) or extension.lstrip("."),
                singleline=singleline,
                multiline_start=_as_str(entry_data.get("multiline_start")),
                multiline_end=_as_str(entry_data.get("multiline_end")),
                doc_marker=_as_str(entry_data.get("doc_marker")),
                lexer=_as_str(entry_data.get("lexer")),
            )
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    return languages


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "LitdocConfig", "load_config"]
