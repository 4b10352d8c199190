"""HTTP API: FastAPI app factory, routers and dependencies."""
