"""pathops - filesystem mutation helpers with a structured failure taxonomy."""

__version__ = "0.1.0"
