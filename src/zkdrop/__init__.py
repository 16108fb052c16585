"""zkdrop: client-side envelope encryption for zero-knowledge file sharing."""

__version__ = "0.1.0"
