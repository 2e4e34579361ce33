"""
Cheese Shop API — Application Package
======================================

What: A small FastAPI service exposing the cheese catalogue over two
      read-only endpoints: GET /cheeses and GET /cheeses/{id}.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← path parsing, status codes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← lookups, serialization
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
