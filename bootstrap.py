"""
组合根 - 创建存储句柄并装配仓储/用例对象图

REST 与 gRPC 两个监听器共享同一个 Container，从而共享同一连接池与同一组用例实例。
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Optional

from application.services.order_service import OrderApplicationService
from application.services.token_service import TokenService
from application.services.user_service import UserApplicationService
from core.config import Settings, settings as default_settings
from domain.user.service import PasswordService
from infrastructure.database import Database
from infrastructure.unit_of_work import SQLAlchemyUnitOfWork


@dataclass
class Container:
    settings: Settings
    database: Database
    order_service: OrderApplicationService
    user_service: UserApplicationService
    token_service: TokenService

    async def close(self) -> None:
        await self.database.dispose()


def build_container(
    config: Optional[Settings] = None,
    *,
    database: Optional[Database] = None,
) -> Container:
    config = config or default_settings
    db = database or Database(config.database.url)
    uow_factory = partial(SQLAlchemyUnitOfWork, db.session_factory)

    token_service = TokenService(
        secret_key=config.SECRET_KEY,
        algorithm=config.ALGORITHM,
        expire_minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
    password_service = PasswordService(iterations=config.PASSWORD_HASH_ITERATIONS)

    return Container(
        settings=config,
        database=db,
        order_service=OrderApplicationService(uow_factory),
        user_service=UserApplicationService(uow_factory, password_service, token_service),
        token_service=token_service,
    )
