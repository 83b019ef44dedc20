"""satorder — satellite imagery catalog search and ordering service."""

__version__ = "1.0.0"
