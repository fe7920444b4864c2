"""HTTP layer: versioned routers built on FastAPI."""
