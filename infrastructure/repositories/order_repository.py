"""
订单仓储实现 - 使用SQLAlchemy实现数据访问
"""
from typing import Any, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from domain.order.entity import Order
from domain.order.repository import OrderRepository
from domain.common.exceptions import OrderNotFoundException
from infrastructure.models.order import OrderModel


class SQLAlchemyOrderRepository(OrderRepository):
    """订单仓储的SQLAlchemy实现"""

    PATCHABLE_FIELDS = frozenset({"total"})

    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_entity(self, model: OrderModel) -> Order:
        """将数据库模型转换为领域实体"""
        return Order(id=model.id, total=model.total)

    async def save(self, order: Order) -> Order:
        """创建订单"""
        db_order = OrderModel(total=order.total)
        self.session.add(db_order)
        await self.session.flush()  # 获取生成的ID
        await self.session.refresh(db_order)
        return self._to_entity(db_order)

    async def find_all(self) -> List[Order]:
        """获取订单列表（按ID升序）"""
        result = await self.session.execute(select(OrderModel).order_by(OrderModel.id))
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_by_id(self, order_id: int) -> Order:
        """根据ID获取订单"""
        result = await self.session.execute(
            select(OrderModel).where(OrderModel.id == order_id)
        )
        db_order = result.scalar_one_or_none()
        if db_order is None:
            raise OrderNotFoundException(order_id)
        return self._to_entity(db_order)

    async def patch(self, order_id: int, fields: dict[str, Any]) -> None:
        """部分更新订单：单条 UPDATE，受影响行数为0即视为不存在"""
        unknown = set(fields) - self.PATCHABLE_FIELDS
        if unknown:
            raise ValueError(f"fields not patchable: {sorted(unknown)}")
        if not fields:
            await self.find_by_id(order_id)
            return

        result = await self.session.execute(
            update(OrderModel).where(OrderModel.id == order_id).values(**fields)
        )
        if result.rowcount == 0:
            raise OrderNotFoundException(order_id)

    async def delete(self, order_id: int) -> None:
        """删除订单"""
        result = await self.session.execute(
            delete(OrderModel).where(OrderModel.id == order_id)
        )
        if result.rowcount == 0:
            raise OrderNotFoundException(order_id)
