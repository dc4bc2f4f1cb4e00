"""
API Routers - HTTP endpoint handlers

Each router handles a specific domain of functionality:
- movies: Create (decode, validate, echo) and show movie records
- health: Service status, environment and version
"""
