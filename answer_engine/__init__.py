"""Question answering over a private knowledge base with model and web fallbacks."""

__version__ = "0.1.0"
