from __future__ import annotations

import grpc

from application.services.order_service import OrderApplicationService
from application.dto import OrderCreateDTO
from grpc_app.generated import order_pb2, order_pb2_grpc
from grpc_app.mappers.common import build_dto, parse_order_id
from grpc_app.mappers.order import order_dto_to_proto, patch_request_to_dto


class OrderService(order_pb2_grpc.OrderServiceServicer):
    """gRPC adapter over OrderApplicationService; errors are mapped by the interceptor."""

    def __init__(self, svc: OrderApplicationService) -> None:
        self._svc = svc

    async def CreateOrder(self, request: order_pb2.CreateOrderRequest, context: grpc.aio.ServicerContext) -> order_pb2.OrderReply:  # type: ignore[override]
        dto = build_dto(OrderCreateDTO, total=request.total)
        order = await self._svc.create_order(dto)
        return order_pb2.OrderReply(order=order_dto_to_proto(order))

    async def FindOrderByID(self, request: order_pb2.OrderIdRequest, context: grpc.aio.ServicerContext) -> order_pb2.OrderReply:  # type: ignore[override]
        order = await self._svc.find_order_by_id(parse_order_id(request.id))
        return order_pb2.OrderReply(order=order_dto_to_proto(order))

    async def FindAllOrders(self, request: order_pb2.FindAllOrdersRequest, context: grpc.aio.ServicerContext) -> order_pb2.OrderListReply:  # type: ignore[override]
        orders = await self._svc.find_all_orders()
        return order_pb2.OrderListReply(orders=[order_dto_to_proto(o) for o in orders])

    async def PatchOrder(self, request: order_pb2.PatchOrderRequest, context: grpc.aio.ServicerContext) -> order_pb2.OrderReply:  # type: ignore[override]
        order = await self._svc.patch_order(parse_order_id(request.id), patch_request_to_dto(request))
        return order_pb2.OrderReply(order=order_dto_to_proto(order))

    async def DeleteOrder(self, request: order_pb2.OrderIdRequest, context: grpc.aio.ServicerContext) -> order_pb2.DeleteOrderReply:  # type: ignore[override]
        await self._svc.delete_order(parse_order_id(request.id))
        return order_pb2.DeleteOrderReply(message="order deleted")
