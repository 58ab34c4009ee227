"""Threadline: forum backend with registered and anonymous participation."""

__version__ = "0.1.0"
