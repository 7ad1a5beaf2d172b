"""Core package - Configuration, logging, exceptions.

This package provides foundational infrastructure used by all other layers.

Modules:
    - config: Environment and configuration management
    - logging: Structured JSON logging
    - exceptions: Custom exception hierarchy
    - tasks: Thread, task and debounce management
"""

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

__all__ = [
    "SheetwrightError",
    "ConfigurationError",
    "ValidationError",
    "CatalogError",
    "TemplateError",
    "SegmentationError",
    "NoSegmentsError",
    "IntegrationError",
    "CompilerError",
]
