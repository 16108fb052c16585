"""Command-line frontend for zkdrop."""
