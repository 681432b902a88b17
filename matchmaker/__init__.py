"""Board game match-making API."""

__version__ = "0.1.0"
