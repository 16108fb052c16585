"""Core package of zkdrop: errors, configuration, hashing and share models."""
