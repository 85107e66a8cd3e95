"""Chat analytics API."""
