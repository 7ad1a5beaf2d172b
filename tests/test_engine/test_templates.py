"""Tests for carrier embedding and starter documents."""

from pathlib import Path

import pytest

from sheetwright.core.config import DEFAULT_TEMPLATE_PATH
from sheetwright.core.exceptions import TemplateError
from sheetwright.engine import templates
from sheetwright.engine.segmenter import DocumentSegment
from sheetwright.engine.templates import (
    CONTENT_PLACEHOLDER,
    embed,
    embed_segment,
    is_starter_content,
    list_starters,
    load_carrier_template,
    render_starter,
    validate_carrier_template,
)


@pytest.fixture(autouse=True)
def fresh_env():
    templates.reset_env()
    yield
    templates.reset_env()


class TestEmbed:
    """Test embedding content into the carrier."""

    def test_substitutes_placeholders(self, carrier: str):
        """Content and number replace their placeholders."""
        document = embed(carrier, "Hello $x$", 3)
        assert "\\newcommand{\\exercisenum}{3}" in document
        assert "Hello $x$" in document
        assert CONTENT_PLACEHOLDER not in document
        assert "\\reviewmodefalse" in document

    def test_review_mode_flips_switch(self, carrier: str):
        """Review mode turns the switch on."""
        document = embed(carrier, "body", 1, review=True)
        assert "\\reviewmodetrue" in document
        assert "\\reviewmodefalse" not in document

    def test_content_with_placeholder_text_is_left_alone(self, carrier: str):
        """Placeholder text inside content is not substituted."""
        content = "see \\newcommand{\\exercisenum}{X} and " + CONTENT_PLACEHOLDER
        document = embed(carrier, content, 4)
        assert document.count("\\newcommand{\\exercisenum}{4}") == 1
        assert content in document

    def test_missing_placeholder(self):
        """A carrier without placeholders raises TemplateError."""
        with pytest.raises(TemplateError, match="placeholder"):
            embed("\\documentclass{article}", "body", 1)

    def test_embed_segment_uses_label(self, carrier: str):
        """Segments are numbered by their label."""
        segment = DocumentSegment(ordinal=1, text="\\exercisetitle{Exercise 7: X}", number=7)
        document = embed_segment(carrier, segment)
        assert "\\newcommand{\\exercisenum}{7}" in document
        assert segment.text in document


class TestCarrierTemplate:
    """Test loading and validating the carrier."""

    def test_shipped_template_is_valid(self):
        """The packaged carrier passes validation."""
        carrier = load_carrier_template(DEFAULT_TEMPLATE_PATH)
        assert validate_carrier_template(carrier) == []

    def test_validate_reports_missing_and_duplicate(self, carrier: str):
        """Missing and duplicated markers are reported."""
        broken = carrier.replace(CONTENT_PLACEHOLDER, "") + "\\reviewmodefalse\n"
        issues = validate_carrier_template(broken)
        assert any("Missing content placeholder" in i for i in issues)
        assert any("Duplicate review switch" in i for i in issues)

    def test_load_missing_file(self, tmp_path: Path):
        """Unreadable carrier raises TemplateError."""
        with pytest.raises(TemplateError, match="Cannot read"):
            load_carrier_template(tmp_path / "missing.tex")


class TestStarters:
    """Test starter documents."""

    def test_list_starters(self):
        """Both document modes ship a starter."""
        assert list_starters() == ["review", "solution"]

    def test_render_defaults(self):
        """Defaults fill the title line."""
        content = render_starter("solution")
        assert "\\exercisetitle{Exercise 1: Your Title Here}" in content

    def test_render_with_context(self):
        """Context values reach the template."""
        content = render_starter("review", exercise_number=4, title="Heaps")
        assert "\\exercisetitle{Exercise 4: Heaps}" in content

    def test_unknown_mode(self):
        """Unknown modes raise TemplateError."""
        with pytest.raises(TemplateError, match="No starter"):
            render_starter("draft")

    def test_is_starter_content(self):
        """Untouched starters are recognised, edited ones are not."""
        assert is_starter_content(render_starter("review"))
        assert is_starter_content("  " + render_starter("solution") + "\n\n")
        assert not is_starter_content(render_starter("solution") + "my own work")
