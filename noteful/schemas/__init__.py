# Schemas package init
"""
Noteful API — Pydantic Request/Response Schemas
===============================================

What:  The API contract between clients and the backend.
How:   FastAPI validates request bodies against the *Create/*Update models
       and serializes ORM objects through the *Response models.

JSON keys are camelCase (`folderId`, `userId`, `createdAt`) via the alias
generator on APIModel; Python code keeps snake_case attribute names.
"""
