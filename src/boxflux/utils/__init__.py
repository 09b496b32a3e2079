"""Constants, type aliases and timing utilities."""
