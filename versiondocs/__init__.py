"""Multi-version MkDocs site builder."""

__version__ = "0.1.0"
