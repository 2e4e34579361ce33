"""
Cheese Shop API — Cheese Route Handlers
========================================

What:  Handles GET /cheeses (list) and GET /cheeses/{cheese_id} (detail).
How:   Parses the path segment, delegates to CheeseService, returns JSON.

Path parameter flow (GET /cheeses/42):
    "42" (raw str segment)
      → parse_cheese_id()          → 42 (int) or NotFoundError
      → cheese_service.get_cheese  → CheeseResponse or NotFoundError
      → JSON body / 404 {"error": "not found"}

The segment is declared as a plain string and parsed here rather than
typed as int in the signature, so "abc" becomes a 404 like any other
unknown cheese instead of FastAPI's 422.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from cheeseshop.database import get_db_session
from cheeseshop.exceptions import NotFoundError
from cheeseshop.schemas.cheese import CheeseResponse, ErrorResponse
from cheeseshop.services.cheese_service import cheese_service

logger = logging.getLogger(__name__)

# Largest value a signed 64-bit integer column can hold
MAX_CHEESE_ID = 2**63 - 1

router = APIRouter(tags=["Cheeses"])


def parse_cheese_id(
    cheese_id: str = Path(description="Numeric cheese identifier"),
) -> int:
    """
    Parse the raw path segment into the store's key type.

    Only ASCII decimal digits are accepted, which rules out signs,
    whitespace, underscores and non-ASCII digits that int() would take.
    Values past the 64-bit range cannot exist in the table.

    Raises:
        NotFoundError: The segment cannot name a stored cheese
    """
    if not (cheese_id.isascii() and cheese_id.isdigit()):
        raise NotFoundError(resource="cheese", resource_id=cheese_id)

    value = int(cheese_id)
    if value > MAX_CHEESE_ID:
        raise NotFoundError(resource="cheese", resource_id=cheese_id)
    return value


@router.get(
    "/cheeses",
    response_model=List[CheeseResponse],
    responses={
        200: {"description": "Every cheese, in insertion order"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all cheeses",
)
async def list_cheeses(
    db: AsyncSession = Depends(get_db_session),
) -> List[CheeseResponse]:
    return await cheese_service.list_cheeses(db=db)


@router.get(
    "/cheeses/{cheese_id}",
    response_model=CheeseResponse,
    responses={
        200: {"description": "The matching cheese", "model": CheeseResponse},
        404: {"description": "No cheese with that id", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single cheese by id",
)
async def get_cheese(
    cheese_id: int = Depends(parse_cheese_id),
    db: AsyncSession = Depends(get_db_session),
) -> CheeseResponse:
    """
    Return one cheese.

    Args:
        cheese_id: Integer produced by parse_cheese_id from the path segment.
    """
    return await cheese_service.get_cheese(db=db, cheese_id=cheese_id)
