"""Server — configuration and the FastAPI application (see server.main)."""
