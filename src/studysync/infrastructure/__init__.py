"""Infrastructure layer - external dependencies and implementations.

This layer contains the database adapters (SQLAlchemy), the HTTP API
(FastAPI) and authentication (JWT, Argon2). It implements the storage and
transport the domain layer relies on.
"""
