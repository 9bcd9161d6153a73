"""
订单应用服务 - 编排订单用例，REST 与 gRPC 共用同一实例
"""
from decimal import Decimal
from typing import Callable, List

from domain.order.entity import Order
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.common.exceptions import DomainValidationException
from application.dto import OrderCreateDTO, OrderPatchDTO, OrderResponseDTO
from core.logging_config import get_logger


logger = get_logger(__name__)


class OrderApplicationService:
    """订单应用服务"""

    def __init__(self, uow_factory: Callable[..., AbstractUnitOfWork]):
        self._uow_factory = uow_factory

    @staticmethod
    def _check_total(total: Decimal) -> None:
        try:
            Order.validate_total(total)
        except ValueError as exc:
            raise DomainValidationException(str(exc), field="total")

    async def create_order(self, order_data: OrderCreateDTO) -> OrderResponseDTO:
        """创建订单"""
        self._check_total(order_data.total)
        async with self._uow_factory() as uow:
            order = await uow.order_repository.save(Order(id=None, total=order_data.total))
        logger.info("order_created", order_id=order.id)
        return self._to_response_dto(order)

    async def find_all_orders(self) -> List[OrderResponseDTO]:
        """获取全部订单"""
        async with self._uow_factory(readonly=True) as uow:
            orders = await uow.order_repository.find_all()
            return [self._to_response_dto(o) for o in orders]

    async def find_order_by_id(self, order_id: int) -> OrderResponseDTO:
        """获取订单"""
        async with self._uow_factory(readonly=True) as uow:
            order = await uow.order_repository.find_by_id(order_id)
            return self._to_response_dto(order)

    async def patch_order(self, order_id: int, patch: OrderPatchDTO) -> OrderResponseDTO:
        """部分更新订单，返回更新后从存储重新读取的状态"""
        fields = patch.patch_fields()
        if not fields:
            raise DomainValidationException("no fields to update")
        if "total" in fields:
            self._check_total(fields["total"])

        async with self._uow_factory() as uow:
            await uow.order_repository.patch(order_id, fields)
            order = await uow.order_repository.find_by_id(order_id)
        logger.info("order_patched", order_id=order_id, fields=sorted(fields))
        return self._to_response_dto(order)

    async def delete_order(self, order_id: int) -> None:
        """删除订单"""
        async with self._uow_factory() as uow:
            await uow.order_repository.delete(order_id)
        logger.info("order_deleted", order_id=order_id)

    def _to_response_dto(self, order: Order) -> OrderResponseDTO:
        """将领域实体转换为响应DTO"""
        return OrderResponseDTO(id=int(order.id), total=float(order.total))
