"""Integrations package - External tools.

Integrations:
    - base: Abstract base class for integrations
    - latex: pdflatex compiler (the only external collaborator)
"""
