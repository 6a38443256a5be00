"""
Notes API - Application Package Initializer
============================================

What: Marks the `notes_api` directory as a Python package.
Who:  Imported by uvicorn (`notes_api.main:app`), Alembic, and pytest.

Architecture Note:
    The backend follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  <- HTTP verbs, identity, status codes
    ├─────────────────────────────────────┤
    │   Pipeline (validators + dispatch)  │  <- every request object passes here
    ├─────────────────────────────────────┤
    │      Services (one handler/op)      │  <- single read and/or write per call
    ├─────────────────────────────────────┤
    │   Models, Schemas & Mapping profiles│  <- ORM rows, DTOs, field copies
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  <- async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Handlers never see HTTP, routes never touch the database directly, and
    exceptions are translated to responses in exactly one place (main.py).
"""

__version__ = "1.0.0"
