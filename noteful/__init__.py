"""
Noteful API — Application Package Initializer
=============================================

What: Marks the `noteful` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn noteful.main:app`), Alembic and pytest.

Architecture Note:
    The backend is split into layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │    Services (Validation + Logic)    │  ← field checks, ownership checks
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the database directly; every query goes through a
    service and is filtered by the authenticated user's id.
"""

__version__ = "1.0.0"
