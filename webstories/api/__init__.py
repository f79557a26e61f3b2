"""HTTP API for the stories backend."""
