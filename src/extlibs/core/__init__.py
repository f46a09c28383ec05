"""Asset resolution core."""
