"""Command handlers for the interactive CLI."""
