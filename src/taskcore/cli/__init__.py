"""Command-line interface for taskcore."""
