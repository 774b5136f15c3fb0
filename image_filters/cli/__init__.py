"""Command-line interface for the image filter tools."""
