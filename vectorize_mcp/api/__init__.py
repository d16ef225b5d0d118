"""HTTP API for the Vectorize tools."""
