"""
Cheese Shop API — Cheese SQLAlchemy Model
==========================================

What:  ORM model representing the `cheeses` table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by CheeseService for reads and inserts, and by Alembic.

Table Design:
    - Integer primary key assigned by the database on insert. The SQLite
      AUTOINCREMENT flag stops a deleted row's id from being handed out
      again; PostgreSQL sequences behave that way already.
    - price: NUMERIC(10, 2) so whole and fractional prices round-trip exactly
    - is_best_seller: plain boolean flag, false unless stated
"""

from decimal import Decimal

from sqlalchemy import Boolean, Integer, Numeric, String, false
from sqlalchemy.orm import Mapped, mapped_column

from cheeseshop.database import Base


class Cheese(Base):
    """
    A cheese in the catalogue.

    Lifecycle:
        Inserted by the seed command (or CheeseService.create_cheese),
        then only ever read. There is no update or delete path.
    """

    __tablename__ = "cheeses"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Store-assigned identifier, never reused",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name, e.g. Cheddar",
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Unit price",
    )

    is_best_seller: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Whether the cheese is flagged as a best seller",
    )

    def __repr__(self) -> str:
        return f"<Cheese(id={self.id}, name='{self.name}', price={self.price})>"
