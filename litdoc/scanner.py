"""Source discovery: expand targets into documentable files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Sequence

from .languages import LanguageRegistry
from .logging import get_logger
from .models import SourceFile

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
}


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or .litdoc.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            if self.directory_only and rel_path.startswith(f"{self.pattern}/"):
                return True
            return False

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def _normalise_target(target: str) -> str:
    normalised = target.replace("\\", "/").strip()
    while normalised.startswith("./"):
        normalised = normalised[2:]
    return normalised.rstrip("/")


def _target_matches(rel_path: str, target: str) -> bool:
    if not target or target == ".":
        return True
    # A literal file or directory name, with or without a slash.
    if rel_path == target or rel_path.startswith(f"{target}/"):
        return True
    if "/" not in target:
        # Bare patterns such as `*.fs` match in every directory.
        return fnmatchcase(rel_path.rsplit("/", 1)[-1], target)
    if fnmatchcase(rel_path, target):
        return True
    # `src/**/*.js` should also match files directly under `src/`.
    return "**/" in target and fnmatchcase(rel_path, target.replace("**/", ""))


class SourceScanner:
    """Walks a directory tree and keeps files with a registered language."""

    def __init__(self, registry: LanguageRegistry) -> None:
        self.registry = registry
        self.logger = get_logger("scanner")

    def scan(
        self,
        root: str | Path,
        targets: Sequence[str] | None = None,
        *,
        exclude: Iterable[str] = (),
        skip_dirs: Iterable[Path] = (),
    ) -> List[SourceFile]:
        """Return the documentable files under ``root`` matching ``targets``, sorted."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Source root not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Source root is not a directory: {root}")

        rules = _parse_gitignore(root_path / ".gitignore")
        for pattern in exclude:
            rule = build_ignore_rule(pattern)
            if rule is not None:
                rules.append(rule)

        skipped = {Path(path).resolve() for path in skip_dirs}
        patterns = [_normalise_target(target) for target in targets or []]

        found: Dict[str, SourceFile] = {}
        for path in self._iter_files(root_path, rules, skipped):
            rel_path = path.relative_to(root_path).as_posix()
            if patterns and not any(_target_matches(rel_path, pattern) for pattern in patterns):
                continue
            language = self.registry.for_path(path)
            if language is None:
                continue
            found[rel_path] = SourceFile(path=path, relative_path=rel_path, language=language)

        # Explicit file targets are honoured even inside ignored directories.
        for pattern in patterns:
            candidate = root_path / pattern
            if not candidate.is_file():
                continue
            try:
                rel_path = candidate.resolve().relative_to(root_path).as_posix()
            except ValueError:
                self.logger.warning("Skipping %s: outside of %s", pattern, root_path)
                continue
            language = self.registry.for_path(candidate)
            if language is None:
                self.logger.warning("Skipping %s: no language registered for its extension", pattern)
                continue
            found.setdefault(
                rel_path,
                SourceFile(path=candidate.resolve(), relative_path=rel_path, language=language),
            )

        self.logger.debug("Scanner matched %d files under %s", len(found), root_path)
        return [found[key] for key in sorted(found)]

    @staticmethod
    def _iter_files(root: Path, rules: Sequence[IgnoreRule], skipped: set[Path]) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            filtered_dirs = []
            for name in dirnames:
                if name in _EXCLUDED_DIRS:
                    continue
                if (current_dir / name).resolve() in skipped:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, True, rules):
                    continue
                filtered_dirs.append(name)
            dirnames[:] = sorted(filtered_dirs)

            for filename in sorted(filenames):
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _should_ignore(rel_path, False, rules):
                    continue
                yield current_dir / filename


__all__ = ["IgnoreRule", "SourceScanner", "build_ignore_rule"]
