"""Output locations and relative links between generated pages."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath


def destination_for(relative_path: str, output_dir: Path, *, keep_extension: bool = False) -> Path:
    """Return the HTML page path for a source file.

    ``src/Example.cs`` maps to ``<output_dir>/src/example.html``. With
    ``keep_extension`` it maps to ``<output_dir>/src/example.cs.html`` so that
    sources sharing a stem do not collide.
    """
    source = PurePosixPath(relative_path.replace("\\", "/").lower())
    if keep_extension:
        page = source.with_name(f"{source.name}.html")
    else:
        page = source.with_suffix(".html")
    return output_dir.joinpath(*page.parts)


def path_to_root(page: Path, output_dir: Path) -> str:
    """Return the ``../`` prefix that leads from ``page`` back to ``output_dir``."""
    depth = len(page.relative_to(output_dir).parts) - 1
    return "../" * depth


def relative_link(from_page: Path, to_page: Path) -> str:
    """Return a POSIX URL from one generated page to another."""
    return Path(os.path.relpath(to_page, from_page.parent)).as_posix()


__all__ = ["destination_for", "path_to_root", "relative_link"]
