"""Tests for the exception hierarchy."""

import pytest

from sheetwright.core.exceptions import (
    CatalogError,
    CompilerError,
    ConfigurationError,
    IntegrationError,
    NoSegmentsError,
    SegmentationError,
    SheetwrightError,
    TemplateError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Every custom exception is a SheetwrightError."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigurationError,
            ValidationError,
            CatalogError,
            TemplateError,
            SegmentationError,
            NoSegmentsError,
            IntegrationError,
            CompilerError,
        ],
    )
    def test_inherits_from_base(self, exc_class):
        """All exceptions derive from SheetwrightError."""
        assert issubclass(exc_class, SheetwrightError)

    def test_catalog_and_template_are_validation_errors(self):
        """Catalog and template problems are validation errors."""
        assert issubclass(CatalogError, ValidationError)
        assert issubclass(TemplateError, ValidationError)

    def test_no_segments_is_segmentation_error(self):
        """NoSegmentsError sits under SegmentationError only."""
        assert issubclass(NoSegmentsError, SegmentationError)
        assert not issubclass(NoSegmentsError, ValidationError)

    def test_compiler_error_is_integration_error(self):
        """CompilerError is an IntegrationError."""
        assert issubclass(CompilerError, IntegrationError)

    def test_base_catch_covers_subclasses(self):
        """Catching the base class catches subclasses."""
        with pytest.raises(SheetwrightError):
            raise NoSegmentsError("nothing to split")


class TestExceptionMessages:
    """Messages survive raising."""

    def test_message_preserved(self):
        """Message text is kept."""
        with pytest.raises(CatalogError, match="Duplicate snippet id"):
            raise CatalogError("Duplicate snippet id: '\\\\infty'")

    def test_chained_cause(self):
        """Chained exceptions keep their cause."""
        try:
            try:
                raise OSError("disk gone")
            except OSError as e:
                raise TemplateError("Cannot read carrier template") from e
        except TemplateError as err:
            assert isinstance(err.__cause__, OSError)
