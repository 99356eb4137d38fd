"""Tests for litdoc.generator."""

from __future__ import annotations

from pathlib import Path

import pytest

from litdoc.config import LitdocConfig
from litdoc.errors import UnsupportedLanguageError
from litdoc.generator import Generator
from litdoc.languages import DEFAULT_REGISTRY, Language
from litdoc.models import SourceFile
from tests._fixtures.source_tree import SourceTreeBuilder


def _seed(source_tree: SourceTreeBuilder) -> None:
    source_tree.write(
        {
            "src/app.js": """
                #!/usr/bin/env node
                // Starts the **application**.
                start();

                /* Shuts it down
                   again. */
                stop();
            """,
            "src/lib/Calc.cs": """
                // Adds numbers.
                /// <summary>Hidden XML docs</summary>
                public int Add(int a, int b) => a + b;
            """,
            "README.md": "# ignored\n",
        }
    )


def _config(root: Path, **overrides: object) -> LitdocConfig:
    config = LitdocConfig.defaults(root)
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


def test_generate_writes_pages_index_and_assets(source_tree: SourceTreeBuilder) -> None:
    _seed(source_tree)
    root = source_tree.path().resolve()

    report = Generator(_config(root, workers=2)).generate()

    out = root / "docs"
    assert report.output_dir == out
    assert [page.source for page in report.pages] == ["src/app.js", "src/lib/Calc.cs"]
    assert [page.destination for page in report.pages] == [
        out / "src" / "app.html",
        out / "src" / "lib" / "calc.html",
    ]
    assert report.index == out / "index.html"
    assert (out / "litdoc.css").exists()
    assert (out / "pygments.css").exists()
    assert report.pages[0].section_count == 2


def test_page_renders_docs_code_and_relative_links(source_tree: SourceTreeBuilder) -> None:
    _seed(source_tree)
    root = source_tree.path().resolve()

    Generator(_config(root, highlight=False)).generate()

    html = (root / "docs" / "src" / "app.html").read_text(encoding="utf-8")
    assert "<p>Starts the <strong>application</strong>.</p>" in html
    assert "start();" in html
    assert "Shuts it down" in html
    assert "#!/usr/bin/env node" not in html
    assert 'href="../litdoc.css"' in html
    assert 'href="lib/calc.html"' in html
    assert 'href="../index.html"' in html


def test_doc_comments_are_dropped_from_pages(source_tree: SourceTreeBuilder) -> None:
    _seed(source_tree)
    root = source_tree.path().resolve()

    Generator(_config(root, highlight=False)).generate(["*.cs"])

    html = (root / "docs" / "src" / "lib" / "calc.html").read_text(encoding="utf-8")
    assert "<p>Adds numbers.</p>" in html
    assert "Hidden XML docs" not in html
    assert "public int Add" in html


def test_index_links_every_page(source_tree: SourceTreeBuilder) -> None:
    _seed(source_tree)
    root = source_tree.path().resolve()

    Generator(_config(root, title="Calculator")).generate()

    index = (root / "docs" / "index.html").read_text(encoding="utf-8")
    assert "<h1>Calculator</h1>" in index
    assert 'href="src/app.html"' in index
    assert 'href="src/lib/calc.html"' in index


def test_index_can_be_disabled(source_tree: SourceTreeBuilder) -> None:
    _seed(source_tree)
    root = source_tree.path().resolve()

    report = Generator(_config(root, index=False)).generate()

    assert report.index is None
    assert not (root / "docs" / "index.html").exists()


def test_generate_without_matches_writes_only_assets(source_tree: SourceTreeBuilder) -> None:
    _seed(source_tree)
    root = source_tree.path().resolve()

    report = Generator(_config(root)).generate(["*.vb"])

    assert report.pages == []
    assert report.index is None
    assert [asset.name for asset in report.assets] == ["litdoc.css", "pygments.css"]


def test_rerun_does_not_document_previous_output(source_tree: SourceTreeBuilder) -> None:
    _seed(source_tree)
    root = source_tree.path().resolve()
    config = _config(root, output_dir=root / "site")
    (root / "site").mkdir()
    (root / "site" / "stale.js").write_text("// stale\n", encoding="utf-8")

    report = Generator(config).generate()

    assert "site/stale.js" not in [page.source for page in report.pages]


def test_custom_languages_from_config_are_documented(source_tree: SourceTreeBuilder) -> None:
    source_tree.write({"notes/plan.weird": "%% The plan.\ndo_it\n"})
    root = source_tree.path().resolve()
    weird = Language(name="weird", singleline="%%")

    report = Generator(_config(root, languages={".weird": weird}, highlight=False)).generate()

    assert [page.source for page in report.pages] == ["notes/plan.weird"]
    html = (root / "docs" / "notes" / "plan.html").read_text(encoding="utf-8")
    assert "<p>The plan.</p>" in html
    assert "do_it" in html


def test_document_file_rejects_unregistered_extension(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("text\n", encoding="utf-8")
    language = DEFAULT_REGISTRY.lookup(".js")
    assert language is not None
    source = SourceFile(path=path, relative_path="notes.txt", language=language)

    with pytest.raises(UnsupportedLanguageError):
        Generator(_config(tmp_path)).document_file(source)


def test_document_file_handles_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.js"
    path.write_text("", encoding="utf-8")
    language = DEFAULT_REGISTRY.lookup(".js")
    assert language is not None

    result = Generator(_config(tmp_path)).document_file(
        SourceFile(path=path, relative_path="empty.js", language=language)
    )

    assert result.section_count == 1
    assert result.destination == tmp_path.resolve() / "docs" / "empty.html"
    assert result.destination.exists()


def test_non_utf8_source_is_documented_with_replacement_characters(
    source_tree: SourceTreeBuilder,
) -> None:
    root = source_tree.path().resolve()
    (root / "legacy.cs").write_bytes(b"// Caf\xe9 docs\r\nclass Legacy {}\r\n")

    report = Generator(_config(root, highlight=False)).generate()

    assert [page.source for page in report.pages] == ["legacy.cs"]
    html = (root / "docs" / "legacy.html").read_text(encoding="utf-8")
    assert "<p>Caf\ufffd docs</p>" in html
    assert "class Legacy {}" in html
