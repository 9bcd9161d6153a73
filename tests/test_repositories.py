"""Repository contract against a real (sqlite) store through the Unit of Work."""
from decimal import Decimal

import pytest

from domain.common.exceptions import (
    OrderNotFoundException,
    UserAlreadyExistsException,
    UserNotFoundException,
)
from domain.order.entity import Order
from domain.user.entity import User
from infrastructure.unit_of_work import SQLAlchemyUnitOfWork


@pytest.fixture
def uow_factory(container):
    def factory(**kwargs):
        return SQLAlchemyUnitOfWork(container.database.session_factory, **kwargs)
    return factory


async def test_order_save_assigns_id_and_patch_persists(uow_factory):
    async with uow_factory() as uow:
        saved = await uow.order_repository.save(Order(id=None, total=Decimal("100.50")))
    assert saved.id is not None
    assert saved.total == Decimal("100.50")

    async with uow_factory() as uow:
        await uow.order_repository.patch(saved.id, {"total": Decimal("250.00")})

    async with uow_factory(readonly=True) as uow:
        found = await uow.order_repository.find_by_id(saved.id)
    assert found.total == Decimal("250.00")


async def test_order_missing_id_raises_not_found(uow_factory):
    async with uow_factory(readonly=True) as uow:
        with pytest.raises(OrderNotFoundException):
            await uow.order_repository.find_by_id(999)
    with pytest.raises(OrderNotFoundException):
        async with uow_factory() as uow:
            await uow.order_repository.patch(999, {"total": Decimal("1")})
    with pytest.raises(OrderNotFoundException):
        async with uow_factory() as uow:
            await uow.order_repository.delete(999)


async def test_order_patch_rejects_unknown_fields(uow_factory):
    async with uow_factory() as uow:
        saved = await uow.order_repository.save(Order(id=None, total=Decimal("1")))
    with pytest.raises(ValueError):
        async with uow_factory() as uow:
            await uow.order_repository.patch(saved.id, {"id": 42})


async def test_failed_unit_of_work_rolls_back(uow_factory):
    with pytest.raises(RuntimeError):
        async with uow_factory() as uow:
            await uow.order_repository.save(Order(id=None, total=Decimal("7")))
            raise RuntimeError("boom")

    async with uow_factory(readonly=True) as uow:
        assert await uow.order_repository.find_all() == []


async def test_user_unique_email_enforced_by_store(uow_factory):
    async with uow_factory() as uow:
        first = await uow.user_repository.save(User(id=None, email="a@x.com", name="A", hashed_password="h"))
    # uuid4 string assigned by the store layer
    assert len(first.id) == 36

    # Bypass the service pre-check: the unique index is the backstop
    with pytest.raises(UserAlreadyExistsException):
        async with uow_factory() as uow:
            await uow.user_repository.save(User(id=None, email="a@x.com", name="B", hashed_password="h"))

    async with uow_factory(readonly=True) as uow:
        users = await uow.user_repository.find_all()
    assert [u.name for u in users] == ["A"]


async def test_user_lookup_patch_delete(uow_factory):
    async with uow_factory() as uow:
        saved = await uow.user_repository.save(User(id=None, email="a@x.com", name="A", hashed_password="h"))

    async with uow_factory(readonly=True) as uow:
        assert await uow.user_repository.find_by_email("nobody@x.com") is None
        assert (await uow.user_repository.find_by_email("a@x.com")).id == saved.id

    async with uow_factory() as uow:
        await uow.user_repository.patch(saved.id, {"name": "Renamed"})
    async with uow_factory(readonly=True) as uow:
        user = await uow.user_repository.find_by_id(saved.id)
    assert user.name == "Renamed"
    assert user.hashed_password == "h"

    async with uow_factory() as uow:
        await uow.user_repository.delete(saved.id)
    with pytest.raises(UserNotFoundException):
        async with uow_factory(readonly=True) as uow:
            await uow.user_repository.find_by_id(saved.id)
