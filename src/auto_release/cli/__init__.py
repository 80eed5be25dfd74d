"""Command line interface for auto-release."""
