"""Pasties: a small markdown pastebin."""

__version__ = "1.0.0"
