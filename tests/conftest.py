"""Shared pytest fixtures for Sheetwright tests.

Fixtures:
    - catalog: The shipped command catalog
    - small_catalog: A handful of entries with predictable ranking
    - carrier: Minimal carrier template with all placeholders
    - fake_compiler: Compiler double recording every document it gets
    - make_compiler: FakeCompiler factory
    - sheet: Three-exercise sheet with a preamble before the first title
"""

from pathlib import Path

import pytest

from sheetwright.core.config import Config, reset_config
from sheetwright.engine.catalog import CatalogEntry, CommandCatalog, default_catalog
from sheetwright.integrations.latex import CompileResult

CARRIER = (
    "\\documentclass{article}\n"
    "\\newcommand{\\exercisenum}{X}\n"
    "\\newif\\ifreviewmode\n"
    "\\reviewmodefalse\n"
    "\\begin{document}\n"
    "% Content will be inserted here by the editor\n"
    "\\end{document}\n"
)

SHEET = (
    "Intro text that belongs to no exercise.\n"
    "\\exercisetitle{Exercise 1: Sorting}\n"
    "Sort things.\n"
    "\\exercisetitle{Exercise 2: Graphs}\n"
    "Walk graphs.\n"
    "\\exercisetitle{exercise 5: Heaps}\n"
    "Heapify.\n"
)


class FakeCompiler:
    """Records documents and returns canned results."""

    def __init__(self, fail_when: str = "") -> None:
        self.documents: list[str] = []
        self._fail_when = fail_when

    def compile(self, document: str) -> CompileResult:
        self.documents.append(document)
        if self._fail_when and self._fail_when in document:
            return CompileResult(success=False, message="Undefined control sequence", log="! x")
        return CompileResult(success=True, pdf=b"%PDF-1.5 fake")


@pytest.fixture
def catalog() -> CommandCatalog:
    return default_catalog()


@pytest.fixture
def small_catalog() -> CommandCatalog:
    return CommandCatalog(
        [
            CatalogEntry("\\BigO{}", "Big O", keywords=("bigo", "complexity"), requires_math_mode=True),
            CatalogEntry("\\textbf{}", "Bold Text", keywords=("bold", "strong")),
            CatalogEntry("\\sum_{i=0}^{n}", "Summation", keywords=("sum", "sigma"), requires_math_mode=True),
            CatalogEntry("\\infty", "Infinity", keywords=("inf",), requires_math_mode=True),
        ]
    )


@pytest.fixture
def carrier() -> str:
    return CARRIER


@pytest.fixture
def sheet() -> str:
    return SHEET


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture
def make_compiler():
    """Factory for compilers that fail on matching documents."""
    return FakeCompiler


@pytest.fixture
def mock_config(tmp_path: Path) -> Config:
    """Configuration pointing at temp directories."""
    template = tmp_path / "sheet.tex"
    template.write_text(CARRIER, encoding="utf-8")
    return Config(log_path=tmp_path / "logs", template_path=template)


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()
