"""Toolsmith: backend for a low-code internal tool builder."""

__version__ = "0.4.0"
