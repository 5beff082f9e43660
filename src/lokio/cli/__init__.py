"""Command line interface for lokio."""
