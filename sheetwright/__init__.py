"""Sheetwright Source Package.

Exercise-sheet editor core: slash-command palette and sheet splitting.

Layers:
    - core: Configuration, logging, exceptions, background tasks
    - engine: Catalog, matching, mode detection, insertion, segmentation
    - editor: Palette state machine and auto-compile scheduling
    - integrations: External LaTeX compiler
"""

__version__ = "0.1.0"
