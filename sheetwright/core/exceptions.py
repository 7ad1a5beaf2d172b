"""Sheetwright Exception Hierarchy.

All custom exceptions inherit from SheetwrightError.
NoSegmentsError is its own class because an empty split is a
user-facing diagnostic, not a crash.

Exception Hierarchy:
    SheetwrightError (base)
    ├── ConfigurationError
    ├── ValidationError
    │   ├── CatalogError
    │   └── TemplateError
    ├── SegmentationError
    │   └── NoSegmentsError
    └── IntegrationError
        └── CompilerError
"""


class SheetwrightError(Exception):
    """Base exception for all Sheetwright errors.

    All custom exceptions in Sheetwright inherit from this class,
    allowing for broad exception handling when needed.
    """

    pass


class ConfigurationError(SheetwrightError):
    """Configuration is invalid or missing.

    Raised when:
        - Configuration file is malformed
        - A numeric setting cannot be parsed
        - Template path does not exist
    """

    pass


class ValidationError(SheetwrightError):
    """Data validation failed.

    Raised when:
        - Required field is missing
        - Field value is invalid format
    """

    pass


class CatalogError(ValidationError):
    """Command catalog definition is invalid.

    Raised when:
        - Two entries share the same snippet id
        - An entry has no label
        - Keywords are not a sequence of strings
    """

    pass


class TemplateError(ValidationError):
    """Carrier template cannot be used.

    Raised when:
        - Content placeholder is missing
        - Exercise number placeholder is missing
        - Starter template does not exist
    """

    pass


class SegmentationError(SheetwrightError):
    """Document could not be split into exercises."""

    pass


class NoSegmentsError(SegmentationError):
    """No boundary marker was found in the document.

    Callers surface this to the user. Splitting a sheet without any
    exercise title must never silently produce zero PDFs.
    """

    pass


class IntegrationError(SheetwrightError):
    """External integration failed.

    Base class for integration-specific errors.
    """

    pass


class CompilerError(IntegrationError):
    """LaTeX compiler could not be run.

    Raised when:
        - pdflatex is not installed
        - The process cannot be started

    A document that fails to compile is NOT an error; it is reported
    through CompileResult.
    """

    pass
