"""CLI entrypoints for litdoc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import CONFIG_FILENAME, LitdocConfig, load_config
from .errors import LitdocError
from .generator import Generator
from .languages import DEFAULT_REGISTRY
from .logging import configure_logging


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="litdoc",
        description="Generate side-by-side HTML documentation from commented source files.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write detailed logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate documentation pages for matching source files.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "targets",
        nargs="*",
        help="Glob patterns or paths to document, e.g. '*.fs' (defaults to every known language).",
    )
    generate_parser.add_argument(
        "--root",
        default=".",
        help="Directory to search for sources (defaults to current directory).",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Directory to write pages into (defaults to 'docs' under the root).",
    )
    generate_parser.add_argument(
        "--config",
        default=None,
        help=f"Configuration file (defaults to {CONFIG_FILENAME} under the root).",
    )
    generate_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files to process in parallel.",
    )
    generate_parser.add_argument(
        "--no-highlight",
        action="store_true",
        help="Escape code without syntax highlighting.",
    )
    generate_parser.add_argument(
        "--no-index",
        action="store_true",
        help="Do not write the index page.",
    )

    languages_parser = subparsers.add_parser(
        "languages",
        help="List the file extensions litdoc understands.",
    )
    _add_verbose_option(languages_parser, suppress_default=True)
    languages_parser.add_argument(
        "--config",
        default=None,
        help="Configuration file whose custom languages should be included.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP segmentation service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def _resolve_config(args: argparse.Namespace) -> LitdocConfig:
    root = Path(getattr(args, "root", ".")).expanduser().resolve()
    config_arg = getattr(args, "config", None)
    config = load_config(Path(config_arg) if config_arg else root)
    # Sources are searched under --root even when the config lives elsewhere.
    config.root = root

    output = getattr(args, "output", None)
    if output:
        config.output_dir = Path(output).expanduser().resolve()
    workers = getattr(args, "workers", None)
    if workers is not None:
        if workers < 1:
            raise LitdocError("--workers must be at least 1")
        config.workers = workers
    if getattr(args, "no_highlight", False):
        config.highlight = False
    if getattr(args, "no_index", False):
        config.index = False
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for litdoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file).expanduser() if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "generate":
        try:
            config = _resolve_config(args)
            report = Generator(config).generate(args.targets)
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except LitdocError as exc:
            parser.exit(1, f"litdoc generate failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Wrote {len(report.pages)} page(s) to {_relativize(report.output_dir)}")
    elif args.command == "languages":
        try:
            config = _resolve_config(args)
        except LitdocError as exc:
            parser.exit(1, f"{exc}\n")
        registry = DEFAULT_REGISTRY.extend(config.languages)
        for extension, language in registry.items():
            markers = [language.singleline]
            if language.has_multiline:
                markers.append(f"{language.multiline_start} {language.multiline_end}")
            if language.doc_marker:
                markers.append(f"doc: {language.doc_marker}")
            print(f"{extension:<8} {language.name:<12} {'  '.join(markers)}")
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
