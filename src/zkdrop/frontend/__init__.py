"""Frontends for zkdrop."""
