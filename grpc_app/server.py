from __future__ import annotations

from typing import Optional, Sequence, Tuple
import grpc
from grpc_health.v1 import health, health_pb2_grpc, health_pb2

from bootstrap import Container
from core.logging_config import get_logger
from grpc_app.interceptors.request_id import RequestIdInterceptor
from grpc_app.interceptors.logging import LoggingInterceptor
from grpc_app.interceptors.exceptions import ExceptionMappingInterceptor
from grpc_app.interceptors.auth import AuthInterceptor
from grpc_app.generated import (
    order_pb2_grpc,
    user_pb2_grpc,
    ORDER_SERVICE_NAME,
    USER_SERVICE_NAME,
)
from grpc_app.services.order_service import OrderService
from grpc_app.services.user_service import UserService


logger = get_logger(__name__)


def _server_credentials(container: Container) -> grpc.ServerCredentials:
    tls = container.settings.grpc.tls
    if not (tls.cert and tls.key):
        raise RuntimeError("GRPC TLS enabled but cert/key not provided")
    with open(tls.cert, "rb") as f:
        cert_chain = f.read()
    with open(tls.key, "rb") as f:
        private_key = f.read()
    root_certificates = None
    if tls.ca:
        with open(tls.ca, "rb") as f:
            root_certificates = f.read()
    return grpc.ssl_server_credentials(
        [(private_key, cert_chain)],
        root_certificates=root_certificates,
        require_client_auth=bool(root_certificates),
    )


async def create_server(container: Container, address: Optional[str] = None) -> Tuple[grpc.aio.Server, int]:
    """Build the gRPC server over the shared container.

    Returns the (not yet started) server and the bound port; pass an address
    ending in ``:0`` to bind an ephemeral port.
    """
    config = container.settings.grpc
    # Order matters: first interceptor is the outermost wrapper
    interceptors: Sequence[grpc.aio.ServerInterceptor] = (
        RequestIdInterceptor(),
        LoggingInterceptor(),
        ExceptionMappingInterceptor(),  # maps business exceptions
        AuthInterceptor(container.user_service.verify_token),  # protected RPCs only
    )

    options = [
        ("grpc.max_concurrent_streams", max(1, config.max_concurrent_streams)),
    ]
    server = grpc.aio.server(interceptors=interceptors, options=options)

    # Register services
    order_pb2_grpc.add_OrderServiceServicer_to_server(OrderService(container.order_service), server)
    user_pb2_grpc.add_UserServiceServicer_to_server(UserService(container.user_service), server)

    # Health service
    health_svc = health.aio.HealthServicer()
    health_pb2_grpc.add_HealthServicer_to_server(health_svc, server)
    for name in ("", ORDER_SERVICE_NAME, USER_SERVICE_NAME):
        await health_svc.set(name, health_pb2.HealthCheckResponse.SERVING)

    address = address or f"{config.host}:{config.port}"
    if config.tls.enabled:
        port = server.add_secure_port(address, _server_credentials(container))
    else:
        port = server.add_insecure_port(address)

    logger.info("grpc_server_created", address=address, port=port, tls=config.tls.enabled)
    return server, port
