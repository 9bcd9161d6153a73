"""
用户API路由 - FastAPI表现层
"""
import uuid

from fastapi import APIRouter, Depends

from application.services.user_service import UserApplicationService
from application.dto import UserPatchDTO, UserResponseDTO, MessageDTO, ErrorDTO
from api.dependencies import get_current_user_id, get_user_service

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={
        400: {"model": ErrorDTO, "description": "Invalid data"},
        404: {"model": ErrorDTO, "description": "User not found"},
    },
)


@router.get("", summary="Get all users", response_model=list[UserResponseDTO])
async def find_all_users(service: UserApplicationService = Depends(get_user_service)):
    return await service.find_all_users()


# 必须在 /{user_id} 之前注册
@router.get(
    "/me",
    summary="Get currently authenticated user",
    response_model=UserResponseDTO,
    responses={401: {"model": ErrorDTO, "description": "Missing, invalid or expired token"}},
)
async def get_me(
    current_user_id: str = Depends(get_current_user_id),
    service: UserApplicationService = Depends(get_user_service)
):
    """获取当前登录用户的信息（需要 Bearer 令牌）"""
    return await service.find_user_by_id(current_user_id)


@router.get("/{user_id}", summary="Get user by ID", response_model=UserResponseDTO)
async def find_user_by_id(
    user_id: uuid.UUID,
    service: UserApplicationService = Depends(get_user_service)
):
    return await service.find_user_by_id(str(user_id))


@router.patch("/{user_id}", summary="Update a user partially", response_model=UserResponseDTO)
async def patch_user(
    user_id: uuid.UUID,
    patch: UserPatchDTO,
    service: UserApplicationService = Depends(get_user_service)
):
    """更新用户名称；未提供的字段保持不变，空名称返回 400"""
    return await service.patch_user(str(user_id), patch)


@router.delete("/{user_id}", summary="Delete a user by ID", response_model=MessageDTO)
async def delete_user(
    user_id: uuid.UUID,
    service: UserApplicationService = Depends(get_user_service)
):
    await service.delete_user(str(user_id))
    return MessageDTO(message="user deleted")
