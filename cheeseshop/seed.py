"""
Insert the sample cheese catalogue into the configured database.

There is no create endpoint; this command (or the SEED_ON_STARTUP setting)
is how rows get into the table.

Usage:
    python -m cheeseshop.seed --create-tables
    python -m cheeseshop.seed --if-empty
    DATABASE_URL=postgresql+asyncpg://... cheeseshop-seed
"""

import argparse
import asyncio
import logging
import sys
from decimal import Decimal
from typing import List, Optional, Sequence

from sqlalchemy import func, select

from cheeseshop.database import async_session_factory, create_tables, dispose_engine
from cheeseshop.models.cheese import Cheese
from cheeseshop.schemas.cheese import CheeseCreate, CheeseResponse
from cheeseshop.services.cheese_service import cheese_service

logger = logging.getLogger(__name__)

SAMPLE_CHEESES: List[CheeseCreate] = [
    CheeseCreate(name="Cheddar", price=Decimal("3"), is_best_seller=True),
    CheeseCreate(name="Brie", price=Decimal("4.50"), is_best_seller=False),
    CheeseCreate(name="Gouda", price=Decimal("5"), is_best_seller=True),
    CheeseCreate(name="Roquefort", price=Decimal("7.25"), is_best_seller=False),
    CheeseCreate(name="Manchego", price=Decimal("6"), is_best_seller=False),
]


async def seed_catalogue(
    cheeses: Optional[Sequence[CheeseCreate]] = None,
    if_empty: bool = False,
) -> List[CheeseResponse]:
    """
    Insert `cheeses` (the sample catalogue by default) in one transaction.

    With if_empty=True nothing is inserted when the table already has rows,
    so repeated startups do not duplicate the catalogue.
    """
    cheeses = SAMPLE_CHEESES if cheeses is None else cheeses

    async with async_session_factory() as session:
        if if_empty:
            existing = await session.scalar(select(func.count(Cheese.id)))
            if existing:
                logger.info("Catalogue already holds %d cheeses, skipping seed", existing)
                return []

        created = [await cheese_service.create_cheese(session, data) for data in cheeses]
        await session.commit()

    return created


async def _run(args: argparse.Namespace) -> List[CheeseResponse]:
    try:
        if args.create_tables:
            await create_tables()
        return await seed_catalogue(if_empty=args.if_empty)
    finally:
        await dispose_engine()


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Seed the cheese catalogue.")
    ap.add_argument(
        "--if-empty",
        action="store_true",
        help="Only insert when the cheeses table has no rows",
    )
    ap.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables first (use Alembic for deployed databases)",
    )
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    created = asyncio.run(_run(args))
    if not created:
        print("Nothing inserted.")
        return 0

    for cheese in created:
        print(f"[+] {cheese.id}: {cheese.name} ({cheese.price})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
