"""HTTP API for the classification calculator."""
