from __future__ import annotations

from application.dto import OrderPatchDTO, OrderResponseDTO
from grpc_app.generated import order_pb2
from grpc_app.mappers.common import build_dto


def order_dto_to_proto(dto: OrderResponseDTO) -> order_pb2.Order:
    return order_pb2.Order(id=int(dto.id), total=float(dto.total))


def patch_request_to_dto(request: order_pb2.PatchOrderRequest) -> OrderPatchDTO:
    # proto3 optional: HasField distinguishes "unset" from 0.0
    if request.HasField("total"):
        return build_dto(OrderPatchDTO, total=request.total)
    return OrderPatchDTO()
