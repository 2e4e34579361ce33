"""
Cheese Shop API — Cheese Service
=================================

What:  Reads (and, for seeding, inserts) cheeses and maps them to their
       wire representation.
How:   Plain SQLAlchemy queries on the session handed in by the caller.
Who:   Called by the /cheeses route handlers and by the seed command.

Lookup contract:
    get_cheese() is strict. A missing record raises NotFoundError, which
    the global handler turns into 404 {"error": "not found"}. It never
    returns None to the route.

CheeseService is stateless; it receives the db session on each call.
"""

import logging
from decimal import Decimal
from typing import List, Union

from sqlalchemy import asc, select
from sqlalchemy.ext.asyncio import AsyncSession

from cheeseshop.exceptions import DatabaseError, NotFoundError
from cheeseshop.models.cheese import Cheese
from cheeseshop.schemas.cheese import CheeseCreate, CheeseResponse

logger = logging.getLogger(__name__)


def _wire_price(value: Union[Decimal, int, float]) -> Union[int, float]:
    """NUMERIC(10, 2) comes back as Decimal('3.00'); whole amounts go out as ints."""
    amount = Decimal(str(value))
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def serialize_cheese(cheese: Cheese) -> CheeseResponse:
    """
    Map a Cheese row to its wire representation.

    Only id, name, price and is_best_seller are exposed, whatever else
    the table carries.
    """
    return CheeseResponse(
        id=cheese.id,
        name=cheese.name,
        price=_wire_price(cheese.price),
        is_best_seller=bool(cheese.is_best_seller),
    )


class CheeseService:
    """
    Business logic layer for cheese operations.

    Responsibilities:
        - list_cheeses(): every cheese in insertion order
        - get_cheese(): single lookup with not-found handling
        - create_cheese(): insert used by seeding, not exposed over HTTP
    """

    async def list_cheeses(self, db: AsyncSession) -> List[CheeseResponse]:
        """
        Return all cheeses ordered by id.

        Ids are handed out in increasing order, so ordering by id is
        insertion order. An empty table yields an empty list.

        Raises:
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(select(Cheese).order_by(asc(Cheese.id)))
            cheeses = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing cheeses: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve cheeses. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [serialize_cheese(cheese) for cheese in cheeses]

    async def get_cheese(self, db: AsyncSession, cheese_id: int) -> CheeseResponse:
        """
        Retrieve a single cheese by id.

        Query plan:
            SELECT * FROM cheeses WHERE id = :id  (primary key lookup)

        Args:
            db: Async database session
            cheese_id: Already-parsed integer identifier

        Returns:
            CheeseResponse for the matching row

        Raises:
            NotFoundError: No cheese with that id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(select(Cheese).where(Cheese.id == cheese_id))
            cheese = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching cheese %s: %s", cheese_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve the cheese. Please try again.",
                context={"cheese_id": cheese_id},
            )

        if cheese is None:
            logger.debug("Cheese %s not found", cheese_id)
            raise NotFoundError(resource="cheese", resource_id=str(cheese_id))

        return serialize_cheese(cheese)

    async def create_cheese(self, db: AsyncSession, data: CheeseCreate) -> CheeseResponse:
        """
        Insert a cheese and return it with its store-assigned id.

        The row is flushed, not committed; the caller owns the transaction
        (get_db_session commits per request, the seed command commits once
        at the end).
        """
        cheese = Cheese(
            name=data.name,
            price=data.price,
            is_best_seller=data.is_best_seller,
        )
        db.add(cheese)
        try:
            await db.flush()
        except Exception as e:
            logger.error("Database error creating cheese %r: %s", data.name, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not store the cheese.",
                context={"name": data.name, "error_type": type(e).__name__},
            )

        logger.info("Cheese created: %s (id=%s)", cheese.name, cheese.id)
        return serialize_cheese(cheese)


# ── Singleton Instance ────────────────────────────────────────────────────
cheese_service = CheeseService()
