"""
Shared business codes used across layers (Domain/Core/API/gRPC).

This module provides a single source of truth to avoid drift between
multiple enum definitions scattered across the codebase.
"""
from enum import Enum, IntEnum


class BusinessCode(IntEnum):
    """业务状态码定义（单一来源）"""

    # 成功
    SUCCESS = 0

    # 参数错误 (1xxxx)
    PARAM_ERROR = 10000
    PARAM_VALIDATION_ERROR = 10003

    # 业务错误 (2xxxx)
    USER_NOT_FOUND = 20001
    USER_ALREADY_EXISTS = 20002
    PASSWORD_ERROR = 20003
    TOKEN_INVALID = 20004
    TOKEN_EXPIRED = 20005
    NOT_FOUND = 20006  # 资源未找到（通用）
    ORDER_NOT_FOUND = 20007

    # 权限错误 (3xxxx)
    UNAUTHORIZED = 30001

    # 系统错误 (4xxxx)
    SYSTEM_ERROR = 40000


class ErrorKind(str, Enum):
    """Transport-independent error classes every business code falls into."""

    INVALID_DATA = "InvalidData"
    NOT_FOUND = "NotFound"
    ALREADY_EXISTS = "AlreadyExists"
    UNAUTHORIZED = "Unauthorized"
    INTERNAL = "Internal"


_KIND_BY_CODE = {
    BusinessCode.PARAM_ERROR: ErrorKind.INVALID_DATA,
    BusinessCode.PARAM_VALIDATION_ERROR: ErrorKind.INVALID_DATA,

    BusinessCode.NOT_FOUND: ErrorKind.NOT_FOUND,
    BusinessCode.USER_NOT_FOUND: ErrorKind.NOT_FOUND,
    BusinessCode.ORDER_NOT_FOUND: ErrorKind.NOT_FOUND,

    BusinessCode.USER_ALREADY_EXISTS: ErrorKind.ALREADY_EXISTS,

    BusinessCode.UNAUTHORIZED: ErrorKind.UNAUTHORIZED,
    BusinessCode.PASSWORD_ERROR: ErrorKind.UNAUTHORIZED,
    BusinessCode.TOKEN_INVALID: ErrorKind.UNAUTHORIZED,
    BusinessCode.TOKEN_EXPIRED: ErrorKind.UNAUTHORIZED,

    BusinessCode.SYSTEM_ERROR: ErrorKind.INTERNAL,
}


def kind_of(code: int) -> ErrorKind:
    """Classify a business code; unknown codes are treated as internal."""
    try:
        return _KIND_BY_CODE.get(BusinessCode(code), ErrorKind.INTERNAL)
    except ValueError:
        return ErrorKind.INTERNAL


__all__ = ["BusinessCode", "ErrorKind", "kind_of"]
