"""HTTP API for the movie catalogue."""
