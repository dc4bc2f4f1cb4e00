"""
API Schemas - Pydantic models for request/response bodies

These schemas define the contract between the API and clients.
Domain records (Movie) live in movie_catalog.data.
"""
