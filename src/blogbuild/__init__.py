"""blogbuild: markdown to HTML build pipeline for a personal blog."""

__version__ = "0.3.0"
