"""Marginalia: text anchoring and re-matching for reader comments."""

__version__ = "0.1.0"
