"""Pytest bootstrap configuration.

Ensure mandatory environment variables are set before test collection
and module imports that depend on application settings.
"""
import os

# Mandatory secret key for settings validation
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import uuid
from typing import Any, Dict, List, Optional

import httpx
import pytest

from core.config import DatabaseSettings, Settings
from domain.common.exceptions import (
    OrderNotFoundException,
    UserAlreadyExistsException,
    UserNotFoundException,
)
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.order.entity import Order
from domain.order.repository import OrderRepository
from domain.user.entity import User
from domain.user.repository import UserRepository


# ---------- in-memory doubles for use-case tests ----------

class InMemoryOrderRepository(OrderRepository):
    def __init__(self) -> None:
        self.rows: Dict[int, Order] = {}
        self._next_id = 1

    async def save(self, order: Order) -> Order:
        stored = Order(id=self._next_id, total=order.total)
        self.rows[stored.id] = stored
        self._next_id += 1
        return Order(id=stored.id, total=stored.total)

    async def find_all(self) -> List[Order]:
        return [Order(id=o.id, total=o.total) for _, o in sorted(self.rows.items())]

    async def find_by_id(self, order_id: int) -> Order:
        if order_id not in self.rows:
            raise OrderNotFoundException(order_id)
        row = self.rows[order_id]
        return Order(id=row.id, total=row.total)

    async def patch(self, order_id: int, fields: Dict[str, Any]) -> None:
        if order_id not in self.rows:
            raise OrderNotFoundException(order_id)
        for key, value in fields.items():
            setattr(self.rows[order_id], key, value)

    async def delete(self, order_id: int) -> None:
        if self.rows.pop(order_id, None) is None:
            raise OrderNotFoundException(order_id)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self.rows: Dict[str, User] = {}

    async def save(self, user: User) -> User:
        if any(u.email == user.email for u in self.rows.values()):
            raise UserAlreadyExistsException(user.email)
        stored = User(id=str(uuid.uuid4()), email=user.email, name=user.name, hashed_password=user.hashed_password)
        self.rows[stored.id] = stored
        return stored

    async def find_all(self) -> List[User]:
        return sorted(self.rows.values(), key=lambda u: u.email)

    async def find_by_id(self, user_id: str) -> User:
        if user_id not in self.rows:
            raise UserNotFoundException(user_id)
        return self.rows[user_id]

    async def find_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.rows.values() if u.email == email), None)

    async def patch(self, user_id: str, fields: Dict[str, Any]) -> None:
        if user_id not in self.rows:
            raise UserNotFoundException(user_id)
        for key, value in fields.items():
            setattr(self.rows[user_id], key, value)

    async def delete(self, user_id: str) -> None:
        if self.rows.pop(user_id, None) is None:
            raise UserNotFoundException(user_id)


class FakeStore:
    """Shared state behind every FakeUnitOfWork, with commit/rollback counters."""

    def __init__(self) -> None:
        self.orders = InMemoryOrderRepository()
        self.users = InMemoryUserRepository()
        self.commits = 0
        self.rollbacks = 0

    def uow_factory(self, *, readonly: bool = False) -> "FakeUnitOfWork":
        return FakeUnitOfWork(self, readonly=readonly)


class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self, store: FakeStore, *, readonly: bool = False) -> None:
        super().__init__(readonly=readonly)
        self._store = store

    async def __aenter__(self) -> "FakeUnitOfWork":
        self.order_repository = self._store.orders
        self.user_repository = self._store.users
        return self

    async def commit(self) -> None:
        self._store.commits += 1
        self._committed = True

    async def rollback(self) -> None:
        self._store.rollbacks += 1


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


# ---------- real stack (sqlite) for repository / transport tests ----------

@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        SECRET_KEY="test-secret-key",
        DEBUG=False,
        PASSWORD_HASH_ITERATIONS=1000,
        ACCESS_TOKEN_EXPIRE_MINUTES=60,
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'mess_test.db'}"),
    )


@pytest.fixture
async def container(test_settings):
    from bootstrap import build_container

    container = build_container(test_settings)
    # ASGITransport does not run the lifespan, create the schema here
    await container.database.create_tables()
    try:
        yield container
    finally:
        await container.close()


@pytest.fixture
async def client(container):
    from main import create_app

    app = create_app(container)
    # Let the app's 500 handler answer instead of re-raising into the test
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def grpc_target(container):
    """Start the real gRPC server (with its interceptor chain) on an ephemeral port."""
    from grpc_app.server import create_server

    server, port = await create_server(container, "127.0.0.1:0")
    await server.start()
    try:
        yield f"127.0.0.1:{port}"
    finally:
        await server.stop(grace=None)
