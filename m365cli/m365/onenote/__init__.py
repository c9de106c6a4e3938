"""OneNote commands."""
