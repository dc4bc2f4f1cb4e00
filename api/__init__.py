"""HTTP layer of the movie catalog: FastAPI app, routers and request schemas."""
