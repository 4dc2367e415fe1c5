"""Command-line interface for homepage curation."""
