"""
订单API路由 - FastAPI表现层
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from application.services.order_service import OrderApplicationService
from application.dto import OrderCreateDTO, OrderPatchDTO, OrderResponseDTO, MessageDTO, ErrorDTO
from api.dependencies import get_order_service

# 订单ID是数据库 BIGINT 范围内的正整数，超出范围在参数校验阶段返回 400
MAX_ORDER_ID = 2**63 - 1
OrderId = Annotated[int, Path(ge=1, le=MAX_ORDER_ID, description="订单ID")]

router = APIRouter(
    prefix="/orders",
    tags=["orders"],
    responses={
        400: {"model": ErrorDTO, "description": "Invalid data"},
        404: {"model": ErrorDTO, "description": "Order not found"},
        500: {"model": ErrorDTO, "description": "Internal error"},
    },
)


@router.get("", summary="Get all orders", response_model=list[OrderResponseDTO])
async def find_all_orders(service: OrderApplicationService = Depends(get_order_service)):
    return await service.find_all_orders()


@router.get("/{order_id}", summary="Get order by ID", response_model=OrderResponseDTO)
async def find_order_by_id(
    order_id: OrderId,
    service: OrderApplicationService = Depends(get_order_service)
):
    return await service.find_order_by_id(order_id)


@router.post(
    "",
    summary="Create an order",
    status_code=status.HTTP_201_CREATED,
    response_model=OrderResponseDTO,
)
async def create_order(
    order_data: OrderCreateDTO,
    service: OrderApplicationService = Depends(get_order_service)
):
    """创建订单；total 必须为正数，否则返回 400"""
    return await service.create_order(order_data)


@router.patch("/{order_id}", summary="Update an order partially", response_model=OrderResponseDTO)
async def patch_order(
    order_id: OrderId,
    patch: OrderPatchDTO,
    service: OrderApplicationService = Depends(get_order_service)
):
    """部分更新订单，响应为更新后重新读取的持久化状态"""
    return await service.patch_order(order_id, patch)


@router.delete("/{order_id}", summary="Delete an order by ID", response_model=MessageDTO)
async def delete_order(
    order_id: OrderId,
    service: OrderApplicationService = Depends(get_order_service)
):
    await service.delete_order(order_id)
    return MessageDTO(message="order deleted")
