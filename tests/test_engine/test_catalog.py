"""Tests for the command catalog."""

import json
from pathlib import Path

import pytest

from sheetwright.core.exceptions import CatalogError
from sheetwright.engine.catalog import (
    CatalogEntry,
    CommandCatalog,
    default_catalog,
    load_catalog,
)


class TestCommandCatalog:
    """Test CommandCatalog registry."""

    def test_preserves_order(self, small_catalog: CommandCatalog):
        """Iteration follows construction order."""
        labels = [e.label for e in small_catalog]
        assert labels == ["Big O", "Bold Text", "Summation", "Infinity"]
        assert len(small_catalog) == 4

    def test_lookup_by_snippet(self, small_catalog: CommandCatalog):
        """Entries are looked up by snippet text."""
        assert "\\infty" in small_catalog
        assert small_catalog.get("\\infty").label == "Infinity"
        assert small_catalog.get("\\nothing") is None

    def test_duplicate_id_rejected(self):
        """Duplicate snippet ids raise CatalogError."""
        with pytest.raises(CatalogError, match="Duplicate"):
            CommandCatalog([CatalogEntry("\\a", "A"), CatalogEntry("\\a", "Again")])

    def test_empty_label_rejected(self):
        """Entries need a label."""
        with pytest.raises(CatalogError, match="no label"):
            CommandCatalog([CatalogEntry("\\a", "")])

    def test_entries_are_immutable(self, small_catalog: CommandCatalog):
        """Entries cannot be modified."""
        with pytest.raises(AttributeError):
            small_catalog.entries[0].label = "Other"  # type: ignore[misc]


class TestDefaultCatalog:
    """Test the shipped vocabulary."""

    def test_contains_core_vocabulary(self, catalog: CommandCatalog):
        """Math and text commands are present with correct flags."""
        big_o = catalog.get("\\BigO{}")
        assert big_o is not None
        assert big_o.requires_math_mode
        assert "complexity" in big_o.keywords

        bold = catalog.get("\\textbf{}")
        assert bold is not None and not bold.requires_math_mode

    def test_templates_flagged(self, catalog: CommandCatalog):
        """Exactly the two multi-line scaffolds are templates."""
        templates = [e for e in catalog if e.is_template]
        assert {e.label for e in templates} == {"Algorithm Block", "Multiline Function"}
        assert all("\n" in e.id for e in templates)

    def test_every_entry_has_symbol(self, catalog: CommandCatalog):
        """Every entry has a display glyph."""
        assert all(e.symbol for e in catalog)


class TestFromMapping:
    """Test building a catalog from a mapping."""

    def test_accepts_both_key_spellings(self):
        """camelCase and snake_case flags are both accepted."""
        catalog = CommandCatalog.from_mapping(
            {
                "\\alpha": {"label": "Alpha", "requiresMathMode": True, "keywords": ["greek"]},
                "\\todo{}": {"label": "Todo", "is_template": False},
            }
        )
        alpha = catalog.get("\\alpha")
        assert alpha.requires_math_mode is True
        assert alpha.keywords == ("greek",)
        assert catalog.get("\\todo{}").symbol == "📝"

    def test_string_keywords_rejected(self):
        """Keywords must be a list, not a string."""
        with pytest.raises(CatalogError, match="keywords"):
            CommandCatalog.from_mapping({"\\a": {"label": "A", "keywords": "greek"}})

    def test_non_mapping_metadata_rejected(self):
        """Metadata must be a mapping."""
        with pytest.raises(CatalogError, match="mapping"):
            CommandCatalog.from_mapping({"\\a": ["A"]})  # type: ignore[dict-item]


class TestLoadCatalog:
    """Test loading catalogs from JSON files."""

    def test_load_json(self, tmp_path: Path):
        """JSON object files load in order."""
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps({"\\beta": {"label": "Beta", "requiresMathMode": True}}),
            encoding="utf-8",
        )
        catalog = load_catalog(path)
        assert [e.label for e in catalog] == ["Beta"]

    def test_non_object_rejected(self, tmp_path: Path):
        """Top-level JSON must be an object."""
        path = tmp_path / "catalog.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(CatalogError, match="JSON object"):
            load_catalog(path)

    def test_missing_file(self, tmp_path: Path):
        """Unreadable files raise CatalogError."""
        with pytest.raises(CatalogError, match="Cannot read"):
            load_catalog(tmp_path / "missing.json")
