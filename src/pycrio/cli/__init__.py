"""CLI commands for pycrio."""
