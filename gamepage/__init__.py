"""Server-side HTML fragments for game pages of an achievements site."""

__version__ = "0.1.0"
