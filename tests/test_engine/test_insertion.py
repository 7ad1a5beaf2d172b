"""Tests for insertion planning."""

import pytest

from sheetwright.engine.catalog import ALGORITHM_TEMPLATE, CatalogEntry
from sheetwright.engine.insertion import (
    InsertionPlan,
    WrapStyle,
    cursor_offset,
    is_line_blank_around,
    plan_insertion,
    wrap_snippet,
)

BOLD = CatalogEntry("\\textbf{}", "Bold Text")
BIG_O = CatalogEntry("\\BigO{}", "Big O", requires_math_mode=True)
INFTY = CatalogEntry("\\infty", "Infinity", requires_math_mode=True)
SUM = CatalogEntry("\\sum_{i=0}^{n}", "Summation", requires_math_mode=True)
SUBSCRIPT = CatalogEntry("x_{n}", "Subscript", requires_math_mode=True)
ALGORITHM = CatalogEntry(ALGORITHM_TEMPLATE, "Algorithm Block", is_template=True)


class TestInsertionPlan:
    """Test InsertionPlan.apply."""

    def test_apply_replaces_range(self):
        """The trigger-to-caret range is replaced."""
        plan = InsertionPlan(replace_start=2, replace_end=5, text="XY", cursor=4)
        assert plan.apply("ab/qqcd") == "abXYcd"


class TestLineBlankAround:
    """Test blank-line detection around the query."""

    def test_only_query_on_line(self):
        """Whitespace around the query counts as blank."""
        document = "first\n  /bigo  \nlast"
        assert is_line_blank_around(document, 8, 13) is True

    def test_text_before_trigger(self):
        """Text before the trigger is not blank."""
        document = "cost /bigo"
        assert is_line_blank_around(document, 5, 10) is False

    def test_text_after_caret(self):
        """Text after the caret is not blank."""
        document = "/bigo here"
        assert is_line_blank_around(document, 0, 5) is False


class TestWrapSnippet:
    """Test wrapping styles."""

    def test_block(self):
        """Block wrap uses indented display math."""
        assert wrap_snippet("\\infty", WrapStyle.BLOCK) == "\\[\n    \\infty\n\\]"

    def test_inline(self):
        """Inline wrap uses dollars."""
        assert wrap_snippet("\\infty", WrapStyle.INLINE) == "$\\infty$"

    def test_none(self):
        """No wrap leaves the snippet alone."""
        assert wrap_snippet("\\infty", WrapStyle.NONE) == "\\infty"


class TestPlanInsertion:
    """Test wrap and caret decisions together."""

    def test_text_command_cursor_inside_braces(self):
        """Text commands go unwrapped with the caret in the braces."""
        document = "Hello /bold"
        plan = plan_insertion(BOLD, document, 6, len(document))
        assert plan.wrap is WrapStyle.NONE
        assert plan.apply(document) == "Hello \\textbf{}"
        assert plan.cursor == 14
        assert plan.apply(document)[plan.cursor - 1 : plan.cursor + 1] == "{}"

    def test_math_command_inline_when_line_has_text(self):
        """Math commands in running text get inline wrap."""
        document = "Cost is /bigo"
        plan = plan_insertion(BIG_O, document, 8, len(document))
        assert plan.wrap is WrapStyle.INLINE
        assert plan.text == "$\\BigO{}$"
        assert plan.cursor == 8 + 7

    def test_math_command_block_on_blank_line(self):
        """Math commands alone on a line get display math."""
        document = "Intro\n/bigo\nmore"
        plan = plan_insertion(BIG_O, document, 6, 11)
        assert plan.wrap is WrapStyle.BLOCK
        assert plan.apply(document) == "Intro\n\\[\n    \\BigO{}\n\\]\nmore"
        assert plan.cursor == 6 + 13

    def test_no_wrap_inside_math(self):
        """Inside inline math nothing is wrapped."""
        document = "$x = /infty$"
        plan = plan_insertion(INFTY, document, 5, 11)
        assert plan.wrap is WrapStyle.NONE
        assert plan.apply(document) == "$x = \\infty$"
        assert plan.cursor == 11

    def test_no_wrap_inside_display_math(self):
        """Inside display math nothing is wrapped."""
        document = "\\[\n/sum\n\\]"
        plan = plan_insertion(SUM, document, 3, 7)
        assert plan.wrap is WrapStyle.NONE
        assert plan.text == "\\sum_{i=0}^{n}"

    def test_range_cursor_after_equals(self):
        """Range snippets put the caret after the equals sign."""
        document = "so /sum"
        plan = plan_insertion(SUM, document, 3, len(document))
        assert plan.text == "$\\sum_{i=0}^{n}$"
        assert plan.cursor == 3 + 9

    def test_subscript_without_equals(self):
        """Without an equals sign the caret goes inside the subscript."""
        document = "$/sub$"
        plan = plan_insertion(SUBSCRIPT, document, 1, 5)
        assert plan.text == "x_{n}"
        assert plan.cursor == 1 + 3

    def test_template_cursor_on_first_placeholder(self):
        """Templates put the caret on their first placeholder."""
        document = "/alg"
        plan = plan_insertion(ALGORITHM, document, 0, 4)
        inserted = plan.apply(document)
        assert inserted[plan.cursor :].startswith("Algorithm Name")

    def test_template_earliest_placeholder_wins(self):
        """The earliest placeholder in the text wins."""
        template = CatalogEntry(
            "\n\\begin{spec}\n\\Require Input specification\n\\Ensure Output specification\n\\end{spec}\n",
            "Spec Block",
            is_template=True,
        )
        document = "see /spec"
        plan = plan_insertion(template, document, 4, len(document))
        assert plan.apply(document)[plan.cursor :].startswith("Input specification")

    def test_template_without_placeholder_goes_to_end(self):
        """Templates without placeholders put the caret at the end."""
        template = CatalogEntry("\n\\begin{center}\n\\end{center}\n", "Center", is_template=True)
        plan = plan_insertion(template, "/c", 0, 2)
        assert plan.cursor == len(template.id)

    def test_plain_command_cursor_at_end(self):
        """Plain commands put the caret after the snippet."""
        entry = CatalogEntry("\\newpage", "New Page")
        plan = plan_insertion(entry, "x /np", 2, 5)
        assert plan.cursor == 2 + len("\\newpage")

    def test_caret_before_trigger_is_clamped(self):
        """Caret before trigger replaces nothing."""
        plan = plan_insertion(BOLD, "ab/", 2, 1)
        assert plan.replace_end == 2

    def test_custom_math_check(self):
        """A supplied math-mode check is used."""
        plan = plan_insertion(INFTY, "text /inf", 5, 9, in_math=lambda doc, offset: True)
        assert plan.wrap is WrapStyle.NONE


class TestCursorOffset:
    """Test cursor rule selection."""

    @pytest.mark.parametrize(
        "entry, text, rule",
        [
            (ALGORITHM, ALGORITHM.id, "template_placeholder"),
            (BOLD, BOLD.id, "empty_braces"),
            (SUM, SUM.id, "subscript_range"),
            (INFTY, INFTY.id, "end"),
        ],
    )
    def test_rule_names(self, entry, text, rule):
        """The first applicable rule decides."""
        assert cursor_offset(entry, text)[0] == rule
