"""Terminal music player for browsing, searching and streaming Audius tracks."""

__version__ = "0.1.0"