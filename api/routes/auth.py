"""
认证API路由 - 注册与登录
"""
from fastapi import APIRouter, Depends, status

from application.services.user_service import UserApplicationService
from application.dto import UserCreateDTO, UserResponseDTO, LoginDTO, LoginResponseDTO, ErrorDTO
from api.dependencies import get_user_service

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={
        400: {"model": ErrorDTO, "description": "Invalid data"},
        401: {"model": ErrorDTO, "description": "Invalid email or password"},
        409: {"model": ErrorDTO, "description": "Email already registered"},
    },
)


@router.post(
    "/signup",
    summary="Register a new user",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponseDTO,
)
async def signup(
    user_data: UserCreateDTO,
    service: UserApplicationService = Depends(get_user_service)
):
    """
    注册新用户

    - **email**: 邮箱地址（唯一，用作登录账号）
    - **password**: 密码（只保存哈希）
    - **name**: 显示名称（可选）
    """
    return await service.register_user(user_data)


@router.post("/signin", summary="Authenticate user and return token", response_model=LoginResponseDTO)
async def signin(
    login_data: LoginDTO,
    service: UserApplicationService = Depends(get_user_service)
):
    """用户登录，返回用户信息与访问令牌"""
    return await service.login(login_data)
