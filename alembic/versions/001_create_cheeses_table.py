"""Create cheeses table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `cheeses` table backing GET /cheeses and GET /cheeses/{id}.
Rollback: downgrade() drops the table (all rows lost).
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the cheeses table. Column docs live in cheeseshop/models/cheese.py."""
    op.create_table(
        "cheeses",
        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="Store-assigned identifier, never reused",
        ),
        sa.Column(
            "name",
            sa.String(255),
            nullable=False,
            comment="Display name, e.g. Cheddar",
        ),
        sa.Column(
            "price",
            sa.Numeric(10, 2),
            nullable=False,
            comment="Unit price",
        ),
        sa.Column(
            "is_best_seller",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
            comment="Whether the cheese is flagged as a best seller",
        ),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    op.drop_table("cheeses")
