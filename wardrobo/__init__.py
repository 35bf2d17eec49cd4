"""Wardrobo clothing catalog service."""

__version__ = "0.1.0"
