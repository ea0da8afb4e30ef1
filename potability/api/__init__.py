"""API package — FastAPI wrapper around the classification engine."""
