"""Release Suite: draft GitHub releases from version tags."""

__version__ = "0.1.0"
