"""Lazily populated drive/directory tree for Qt item views."""

__version__ = "0.1.0"
