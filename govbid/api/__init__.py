"""HTTP API for the analysis queue."""
