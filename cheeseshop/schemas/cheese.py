"""
Cheese Shop API — Pydantic Request/Response Schemas
====================================================

What:  Pydantic models defining the wire contract of the API.
How:   FastAPI serializes responses through these models and builds the
       OpenAPI document from them.

Schemas are kept separate from the SQLAlchemy model so the JSON shape is
pinned to exactly four fields no matter what the table grows into.
"""

from decimal import Decimal
from typing import Union

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class CheeseResponse(BaseModel):
    """
    Wire representation of a cheese.

    Returned by GET /cheeses (as array items) and GET /cheeses/{id}.
    price is an int for whole amounts (3) and a float otherwise (4.5).
    """
    id: int = Field(description="Store-assigned identifier")
    name: str = Field(description="Display name")
    price: Union[int, float] = Field(description="Unit price")
    is_best_seller: bool = Field(description="Best seller flag")


class ErrorResponse(BaseModel):
    """
    Error body shared by every non-2xx response.

    Example:
        {"error": "not found"}
    """
    error: str = Field(description="Machine-readable error code")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


# ══════════════════════════════════════════════════════════════════════════
# Input Models (seeding only, there is no create endpoint)
# ══════════════════════════════════════════════════════════════════════════


class CheeseCreate(BaseModel):
    """
    Fields accepted when inserting a cheese.

    Used by the seed command and by tests through CheeseService.create_cheese.
    """
    name: str = Field(min_length=1, max_length=255)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    is_best_seller: bool = Field(default=False)
