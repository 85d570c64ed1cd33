"""Announce a project release by mail."""

__version__ = "0.3.0"
