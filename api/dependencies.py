"""
API依赖项 - 服务获取与认证
"""
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

import structlog

from application.services.order_service import OrderApplicationService
from application.services.user_service import UserApplicationService
from api.middleware.request_id import user_id_var
from bootstrap import Container
from core.exceptions import UnauthorizedException


# HTTP Bearer for direct API calls
http_bearer = HTTPBearer(
    scheme_name="Bearer",
    description="JWT Bearer token authentication",
    auto_error=False,
)


def get_container(request: Request) -> Container:
    return request.app.state.container


async def get_order_service(container: Container = Depends(get_container)) -> OrderApplicationService:
    return container.order_service


async def get_user_service(container: Container = Depends(get_container)) -> UserApplicationService:
    return container.user_service


async def get_token(
    bearer_token: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
) -> str:
    """从 Authorization: Bearer <token> 中提取token"""
    if bearer_token and bearer_token.credentials:
        return bearer_token.credentials
    raise UnauthorizedException("missing token")


async def get_current_user_id(
    request: Request,
    token: str = Depends(get_token),
    service: UserApplicationService = Depends(get_user_service),
) -> str:
    """认证中间件：校验令牌并把用户ID注入请求上下文

    校验失败时抛出 Unauthorized，用例层不会被调用。
    """
    user_id = service.verify_token(token)
    request.state.user_id = user_id
    user_id_var.set(user_id)
    structlog.contextvars.bind_contextvars(user_id=user_id)
    return user_id
