"""jobfill command-line interface."""
