"""
自定义异常映射与全局异常处理器

所有失败响应统一为 ``{"error": <message>}``，状态码由 core.error_mapping 决定。
"""
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.responses import JSONResponse
from starlette import status as http_status

from shared.codes import BusinessCode
from core.error_mapping import business_code_to_http_status, HTTP_STATUS_TO_BUSINESS_CODE
from core.logging_config import get_logger
from domain.common.exceptions import BusinessException


BIZ_CODE_HEADER = "X-Biz-Code"


class UnauthorizedException(BusinessException):
    """未授权异常"""

    def __init__(self, message: str = "unauthorized", code: int = BusinessCode.UNAUTHORIZED):
        super().__init__(
            code=code,
            message=message,
            error_type="Unauthorized",
        )


class TokenExpiredException(BusinessException):
    """Token过期异常"""

    def __init__(self):
        super().__init__(
            code=BusinessCode.TOKEN_EXPIRED,
            message="token expired",
            error_type="TokenExpired",
        )


def error_body(message: str, details: Optional[dict] = None) -> dict:
    """错误响应体"""
    body = {"error": message}
    if details:
        body["details"] = details
    return body


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query")]
    reason = first.get("msg", "invalid value")
    if loc:
        return f"invalid {'.'.join(loc)}: {reason}"
    return f"invalid request: {reason}"


def register_exception_handlers(app: FastAPI):
    """
    注册全局异常处理器

    Args:
        app: FastAPI应用实例
    """

    logger = get_logger(__name__)

    @app.exception_handler(BusinessException)
    async def business_exception_handler(request: Request, exc: BusinessException):
        """处理业务异常"""
        status_code = business_code_to_http_status(exc.code)
        headers = {BIZ_CODE_HEADER: str(int(exc.code))}
        # 对于401返回WWW-Authenticate
        if status_code == http_status.HTTP_401_UNAUTHORIZED:
            headers["WWW-Authenticate"] = "Bearer"
        logger.info(
            "business_error",
            code=int(exc.code),
            error_type=exc.error_type,
            status_code=status_code,
            message=exc.message,
        )
        return JSONResponse(status_code=status_code, content=error_body(exc.message), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """处理参数验证异常（请求体/路径参数解析失败均视为 InvalidData）"""
        code = BusinessCode.PARAM_VALIDATION_ERROR
        return JSONResponse(
            status_code=business_code_to_http_status(code),
            content=error_body(_validation_message(exc)),
            headers={BIZ_CODE_HEADER: str(int(code))},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """处理HTTP异常（路由不存在、方法不允许等）"""
        code = HTTP_STATUS_TO_BUSINESS_CODE.get(exc.status_code, BusinessCode.SYSTEM_ERROR)
        headers = dict(getattr(exc, "headers", None) or {})
        headers[BIZ_CODE_HEADER] = str(int(code))
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """处理所有未捕获的异常（存储/哈希等意外错误）"""
        details = None
        if app.debug:
            details = {"exception": str(exc)}

        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=True,
        )

        return JSONResponse(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("internal server error", details),
            headers={BIZ_CODE_HEADER: str(int(BusinessCode.SYSTEM_ERROR))},
        )
