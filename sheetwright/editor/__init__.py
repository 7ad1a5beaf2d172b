"""Editor package - Palette state machine and editing surface.

Components:
    - palette: Slash-command trigger/query/commit state machine
    - buffer: Headless document + caret that routes keys through the palette
    - autocompile: Debounced background compilation
"""
