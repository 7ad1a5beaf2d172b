"""Sheetwright Test Suite.

Test organization mirrors sheetwright/ structure:
    tests/
    ├── conftest.py          # Shared fixtures
    ├── test_core/           # Config, logging, exceptions, tasks
    ├── test_engine/         # Catalog, matching, mode detection, insertion, splitting
    ├── test_editor/         # Palette state machine, buffer, auto-compile
    ├── test_integrations/   # pdflatex wrapper
    └── test_cli.py          # Command-line entry point
"""
