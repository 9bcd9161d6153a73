from __future__ import annotations

from typing import Callable, Awaitable, Iterable, Optional
import contextvars

import grpc
import structlog

from core.exceptions import UnauthorizedException
from core.logging_config import get_logger
from grpc_app.generated import USER_SERVICE_NAME


logger = get_logger(__name__)

# Full method names that require a bearer token
PROTECTED_METHODS = frozenset({
    f"/{USER_SERVICE_NAME}/GetMe",
})

_current_user_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("grpc_current_user_id", default=None)


def get_current_user_id() -> Optional[str]:
    return _current_user_id.get()


def extract_bearer_token(metadata) -> Optional[str]:
    md = {key.lower(): value for key, value in (metadata or [])}
    auth = md.get("authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth[7:].strip() or None
    return None


class AuthInterceptor(grpc.aio.ServerInterceptor):
    """Bearer token authentication for protected RPCs.

    - Expects metadata ``authorization: Bearer <token>``
    - Only methods in ``protected_methods`` are checked; everything else passes through
    - Failures raise UnauthorizedException / TokenExpiredException, which
      ExceptionMappingInterceptor turns into UNAUTHENTICATED
    """

    def __init__(
        self,
        verify_token: Callable[[str], str],
        protected_methods: Iterable[str] = PROTECTED_METHODS,
    ) -> None:
        self._verify_token = verify_token
        self._protected_methods = frozenset(protected_methods)

    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None or not handler.unary_unary:
            return handler
        if handler_call_details.method not in self._protected_methods:
            return handler

        token = extract_bearer_token(handler_call_details.invocation_metadata)

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            if not token:
                raise UnauthorizedException("missing token")
            user_id = self._verify_token(token)

            ctx_token = _current_user_id.set(user_id)
            structlog.contextvars.bind_contextvars(user_id=user_id)
            try:
                return await handler.unary_unary(request, context)
            finally:
                _current_user_id.reset(ctx_token)

        return grpc.unary_unary_rpc_method_handler(
            _unary_unary,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )
