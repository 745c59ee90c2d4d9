"""Scaffold new Node projects from bundled templates."""

__version__ = "0.3.0"
