"""movelink command-line interface."""
