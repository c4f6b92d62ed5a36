"""Codeful chat client core: response segmentation and markdown rendering."""

__version__ = "0.1.0"
