"""Command-line task tracker backed by a JSON file."""
