"""Convert PHP RFC drafts into wiki-ready published text."""

__version__ = "0.3.0"
