"""logverdict command-line interface."""
