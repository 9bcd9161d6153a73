from __future__ import annotations

from typing import Callable, Awaitable, Sequence, Tuple
import contextvars

import grpc

from core.error_mapping import business_code_to_grpc_status
from core.logging_config import get_logger
from grpc_app.interceptors.request_id import REQUEST_ID_META_KEY, get_request_id
from domain.common.exceptions import BusinessException
from shared.codes import BusinessCode


logger = get_logger(__name__)

BIZ_CODE_META_KEY = "x-biz-code"
ERROR_TYPE_META_KEY = "x-error-type"

# Mark that the current request has been mapped to a gRPC status
_mapped_error: contextvars.ContextVar[bool] = contextvars.ContextVar("grpc_mapped_error", default=False)


def set_mapped_error() -> None:
    _mapped_error.set(True)


def is_mapped_error() -> bool:
    return bool(_mapped_error.get())


def _trailing_metadata(code: int, error_type: str) -> Sequence[Tuple[str, str]]:
    # set_trailing_metadata replaces earlier values, keep the request id
    md = [(BIZ_CODE_META_KEY, str(int(code))), (ERROR_TYPE_META_KEY, error_type)]
    request_id = get_request_id()
    if request_id:
        md.append((REQUEST_ID_META_KEY, request_id))
    return tuple(md)


class ExceptionMappingInterceptor(grpc.aio.ServerInterceptor):
    """Translate business exceptions into gRPC status codes.

    The status comes from core.error_mapping, the same table the REST
    handlers use, so one error kind means the same thing on both transports.
    """

    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None or not handler.unary_unary:
            return handler

        method = handler_call_details.method

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            _mapped_error.set(False)
            try:
                return await handler.unary_unary(request, context)
            except grpc.aio.AbortError:
                # context.abort() already carries its status
                raise
            except BusinessException as exc:
                status = business_code_to_grpc_status(exc.code)
                context.set_trailing_metadata(_trailing_metadata(exc.code, exc.error_type or "BusinessError"))
                set_mapped_error()
                # Concise business error log (no stack)
                logger.info(
                    "grpc_mapped_error",
                    method=method,
                    code=str(int(exc.code)),
                    status=status.name,
                    message=exc.message,
                )
                await context.abort(status, exc.message)
            except Exception as exc:
                context.set_trailing_metadata(_trailing_metadata(BusinessCode.SYSTEM_ERROR, "SystemError"))
                set_mapped_error()
                logger.error(
                    "grpc_unhandled_error",
                    method=method,
                    error=str(exc),
                    error_type=type(exc).__name__,
                    exc_info=True,
                )
                await context.abort(grpc.StatusCode.INTERNAL, "internal server error")

        return grpc.unary_unary_rpc_method_handler(
            _unary_unary,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )
