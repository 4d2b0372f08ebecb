"""HTTP layer: FastAPI app factory and the dashboard route."""
