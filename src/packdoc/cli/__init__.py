"""Command line interface for packdoc."""
