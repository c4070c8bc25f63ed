"""
Bookshelf API Application Package

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session and declarative base
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- exceptions.py: Domain errors mapped to HTTP responses
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request schemas and serialization views
- routers/: API route handlers
- services/: Cache, serializer, repository, validation, security
"""

__version__ = "0.1.0"
