"""
Cheese Service Unit Tests
=========================

What we test:
    ✅ Serialization maps exactly four fields, with whole prices as ints
    ✅ list_cheeses keeps storage order and handles an empty table
    ✅ get_cheese returns the match or raises NotFoundError
    ✅ Driver failures surface as DatabaseError
    ✅ create_cheese round-trips through a real SQLite session
"""

import logging
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from cheeseshop.exceptions import DatabaseError, NotFoundError
from cheeseshop.models.cheese import Cheese
from cheeseshop.schemas.cheese import CheeseCreate
from cheeseshop.services.cheese_service import CheeseService, serialize_cheese


def _mock_cheese(**fields):
    cheese = MagicMock()
    for key, value in fields.items():
        setattr(cheese, key, value)
    return cheese


class TestSerializeCheese:
    """Tests for the entity → wire mapping."""

    def test_whole_price_becomes_int(self, sample_cheese_data):
        result = serialize_cheese(_mock_cheese(**sample_cheese_data))

        assert result.model_dump() == {
            "id": 1,
            "name": "Cheddar",
            "price": 3,
            "is_best_seller": True,
        }
        assert isinstance(result.price, int)

    def test_fractional_price_becomes_float(self):
        result = serialize_cheese(
            _mock_cheese(id=2, name="Brie", price=Decimal("4.50"), is_best_seller=False)
        )

        assert result.price == 4.5
        assert isinstance(result.price, float)

    def test_extra_attributes_are_not_exposed(self, sample_cheese_data):
        cheese = Cheese(**sample_cheese_data)

        assert set(serialize_cheese(cheese).model_dump()) == {
            "id", "name", "price", "is_best_seller",
        }


class TestCheeseServiceList:
    """Tests for list_cheeses."""

    def setup_method(self):
        self.service = CheeseService()

    @pytest.mark.asyncio
    async def test_list_cheeses_empty(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        assert await self.service.list_cheeses(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_list_cheeses_keeps_order(self, mock_db_session):
        rows = [
            _mock_cheese(id=1, name="Cheddar", price=Decimal("3.00"), is_best_seller=True),
            _mock_cheese(id=2, name="Brie", price=Decimal("4.50"), is_best_seller=False),
            _mock_cheese(id=5, name="Gouda", price=Decimal("5.00"), is_best_seller=True),
        ]
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = rows
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_cheeses(mock_db_session)

        assert [c.id for c in result] == [1, 2, 5]
        assert [c.name for c in result] == ["Cheddar", "Brie", "Gouda"]

    @pytest.mark.asyncio
    async def test_list_cheeses_wraps_driver_errors(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("no such table: cheeses"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_cheeses(mock_db_session)

        assert exc_info.value.context == {"error_type": "RuntimeError"}


class TestCheeseServiceGet:
    """Tests for get_cheese retrieval."""

    def setup_method(self):
        self.service = CheeseService()

    @pytest.mark.asyncio
    async def test_get_cheese_found(self, mock_db_session, sample_cheese_data):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = _mock_cheese(**sample_cheese_data)
        mock_db_session.execute.return_value = mock_result

        result = await self.service.get_cheese(mock_db_session, 1)

        assert result.id == 1
        assert result.name == "Cheddar"

    @pytest.mark.asyncio
    async def test_get_cheese_not_found(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_cheese(mock_db_session, 999)

        assert exc_info.value.context == {"resource": "cheese", "resource_id": "999"}

    @pytest.mark.asyncio
    async def test_get_cheese_wraps_driver_errors(self, mock_db_session, caplog):
        mock_db_session.execute = AsyncMock(side_effect=ConnectionError("gone"))

        with caplog.at_level(logging.ERROR, logger="cheeseshop.services.cheese_service"), \
             pytest.raises(DatabaseError):
            await self.service.get_cheese(mock_db_session, 1)

        assert caplog.records[-1].exc_info is not None


class TestCheeseServiceCreate:
    """create_cheese against a real SQLite session."""

    def setup_method(self):
        self.service = CheeseService()

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, db_session):
        created = await self.service.create_cheese(
            db_session,
            CheeseCreate(name="Cheddar", price=3, is_best_seller=True),
        )
        await db_session.commit()

        fetched = await self.service.get_cheese(db_session, created.id)

        assert fetched.model_dump() == {
            "id": created.id,
            "name": "Cheddar",
            "price": 3,
            "is_best_seller": True,
        }

    @pytest.mark.asyncio
    async def test_ids_are_unique_and_increasing(self, db_session):
        first = await self.service.create_cheese(db_session, CheeseCreate(name="Brie", price=4))
        second = await self.service.create_cheese(db_session, CheeseCreate(name="Gouda", price=5))
        await db_session.commit()

        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_deleted_id_is_not_handed_out_again(self, db_session):
        gone = await self.service.create_cheese(db_session, CheeseCreate(name="Stilton", price=6))
        await db_session.commit()
        await db_session.delete(await db_session.get(Cheese, gone.id))
        await db_session.commit()

        replacement = await self.service.create_cheese(db_session, CheeseCreate(name="Feta", price=2))
        await db_session.commit()

        assert replacement.id > gone.id

    @pytest.mark.asyncio
    async def test_create_cheese_logs_traceback_on_flush_failure(self, mock_db_session, caplog):
        mock_db_session.flush = AsyncMock(side_effect=RuntimeError("disk I/O error"))

        with caplog.at_level(logging.ERROR, logger="cheeseshop.services.cheese_service"), \
             pytest.raises(DatabaseError) as exc_info:
            await self.service.create_cheese(mock_db_session, CheeseCreate(name="Feta", price=2))

        assert exc_info.value.context == {"name": "Feta", "error_type": "RuntimeError"}
        assert caplog.records[-1].exc_info is not None

    @pytest.mark.asyncio
    async def test_list_matches_stored_values(self, db_session):
        inputs = [
            CheeseCreate(name="Cheddar", price=Decimal("3"), is_best_seller=True),
            CheeseCreate(name="Brie", price=Decimal("4.50")),
            CheeseCreate(name="Roquefort", price=Decimal("7.25"), is_best_seller=False),
        ]
        for data in inputs:
            await self.service.create_cheese(db_session, data)
        await db_session.commit()

        listed = await self.service.list_cheeses(db_session)

        assert len(listed) == len(inputs)
        assert [(c.name, c.price, c.is_best_seller) for c in listed] == [
            ("Cheddar", 3, True),
            ("Brie", 4.5, False),
            ("Roquefort", 7.25, False),
        ]


class TestNotFoundError:

    def test_caller_context_is_not_mutated(self):
        context = {"route": "/cheeses/{cheese_id}"}

        exc = NotFoundError(resource="cheese", resource_id="7", context=context)

        assert context == {"route": "/cheeses/{cheese_id}"}
        assert exc.context == {
            "route": "/cheeses/{cheese_id}",
            "resource": "cheese",
            "resource_id": "7",
        }
