"""
Catalog Backend - Application Package Initializer
=================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is a thin layered REST API over a relational database:

    ┌─────────────────────────────────────┐
    │        Routes (API Layer)           │  ← HTTP concerns, status codes
    ├─────────────────────────────────────┤
    │   DAOs + Auth Service (Logic)       │  ← Queries, constraint handling
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data)         │  ← SQLAlchemy ORM + Pydantic DTOs
    ├─────────────────────────────────────┤
    │     Database (Persistence)          │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch SQL; DAOs never know about HTTP. A DAO reports
    absence with `None` and the route decides it means 404.
"""

__version__ = "1.0.0"
