"""Command-line interface for regsuite."""
