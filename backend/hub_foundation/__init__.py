"""
Hub Foundation: Application Package Initializer
================================================

What: Marks the `hub_foundation` directory as a Python package.
Who:  Used by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The package is a read-only resource API built from one reusable base class:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Resources (concrete wiring)     │  ← accessor + transformer per type
    ├─────────────────────────────────────┤
    │  Services (ResourceController and   │  ← validation, limits, id fan-out
    │  its ModelAccessor / Transformer)   │
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    A new resource type needs a model, a schema, a transformer, an accessor
    and a controller instance. Routes then call the controller's four public
    operations: show, index, show_scope and index_scope.
"""

__version__ = "1.0.0"
