"""Unit of Work 抽象定义

用例层只依赖这里的抽象：一个 UoW 实例即一次事务边界，
进入时绑定仓储，正常退出提交，异常退出回滚。
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from domain.order.repository import OrderRepository
from domain.user.repository import UserRepository


class AbstractUnitOfWork(ABC):
    """事务边界

    readonly=True 时退出不提交（用于查询与登录），也不会开启显式事务。
    """

    order_repository: Optional[OrderRepository]
    user_repository: Optional[UserRepository]

    def __init__(self, *, readonly: bool = False) -> None:
        self.readonly = readonly
        self._committed = False
        self.order_repository = None
        self.user_repository = None

    async def __aenter__(self) -> "AbstractUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc is not None:
            await self.rollback()
        elif not self.readonly and not self._committed:
            await self.commit()

    @abstractmethod
    async def commit(self) -> None:
        """提交事务"""

    @abstractmethod
    async def rollback(self) -> None:
        """回滚事务"""
