"""
订单仓储接口 - 定义数据访问的抽象接口
"""
from abc import ABC, abstractmethod
from typing import Any, List

from .entity import Order


class OrderRepository(ABC):
    """订单仓储抽象接口 - 只定义能做什么，不管怎么做"""

    @abstractmethod
    async def save(self, order: Order) -> Order:
        """保存订单，返回带有存储层分配ID的实体"""
        pass

    @abstractmethod
    async def find_all(self) -> List[Order]:
        """获取全部订单"""
        pass

    @abstractmethod
    async def find_by_id(self, order_id: int) -> Order:
        """根据ID获取订单，不存在时抛出 OrderNotFoundException"""
        pass

    @abstractmethod
    async def patch(self, order_id: int, fields: dict[str, Any]) -> None:
        """部分更新：仅写入 fields 中出现的字段"""
        pass

    @abstractmethod
    async def delete(self, order_id: int) -> None:
        """删除订单，不存在时抛出 OrderNotFoundException"""
        pass
