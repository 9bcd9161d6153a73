"""
错误码映射 - 业务码到 HTTP / gRPC 状态码的唯一映射表

REST 异常处理器与 gRPC 异常拦截器都从这里取状态码，保证同一类错误在两种
传输协议上语义一致（例如 NotFound -> 404 / NOT_FOUND）。
"""
import grpc
from starlette import status as http_status

from shared.codes import BusinessCode, ErrorKind, kind_of


HTTP_STATUS_BY_KIND = {
    ErrorKind.INVALID_DATA: http_status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: http_status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_EXISTS: http_status.HTTP_409_CONFLICT,
    ErrorKind.UNAUTHORIZED: http_status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INTERNAL: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
}

GRPC_STATUS_BY_KIND = {
    ErrorKind.INVALID_DATA: grpc.StatusCode.INVALID_ARGUMENT,
    ErrorKind.NOT_FOUND: grpc.StatusCode.NOT_FOUND,
    ErrorKind.ALREADY_EXISTS: grpc.StatusCode.ALREADY_EXISTS,
    ErrorKind.UNAUTHORIZED: grpc.StatusCode.UNAUTHENTICATED,
    ErrorKind.INTERNAL: grpc.StatusCode.INTERNAL,
}


def business_code_to_http_status(code: int) -> int:
    """根据业务码映射HTTP状态码"""
    return HTTP_STATUS_BY_KIND[kind_of(code)]


def business_code_to_grpc_status(code: int) -> grpc.StatusCode:
    """根据业务码映射gRPC状态码"""
    return GRPC_STATUS_BY_KIND[kind_of(code)]


# HTTP 框架自身抛出的状态码（路由不存在、方法不允许等）反向映射为业务码
HTTP_STATUS_TO_BUSINESS_CODE = {
    400: BusinessCode.PARAM_ERROR,
    401: BusinessCode.UNAUTHORIZED,
    404: BusinessCode.NOT_FOUND,
    405: BusinessCode.PARAM_ERROR,
    422: BusinessCode.PARAM_VALIDATION_ERROR,
    500: BusinessCode.SYSTEM_ERROR,
}
