"""Command-line interface for the session manager."""
