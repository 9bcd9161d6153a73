"""
FastAPI应用主入口

`create_app(container)` 构建 HTTP 应用；`serve()` 在同一进程内同时运行
HTTP 与 gRPC 两个监听器，两者共享同一个 Container（存储句柄与用例实例）。
"""
import asyncio
import signal
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import auth, orders, users
from api.middleware import RequestIDMiddleware, LoggingMiddleware
from bootstrap import Container, build_container
from core.config import settings
from core.exceptions import register_exception_handlers
from core.logging_config import get_logger, configure_logging
from grpc_app.server import create_server


# 初始化日志：在入口处显式配置
configure_logging()
logger = get_logger(__name__)


def create_app(container: Container) -> FastAPI:
    """根据装配好的 Container 创建 FastAPI 应用"""
    config = container.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # 开发环境自动建表；生产环境由运维提前建好表结构
        if config.DEBUG:
            await container.database.create_tables()
            logger.info("database_initialized", message="Database tables created (development)")
        yield
        logger.info("http_app_shutdown")

    app = FastAPI(
        title=config.PROJECT_NAME,
        version=config.VERSION,
        debug=config.DEBUG,
        lifespan=lifespan,
        description="食堂订单与用户管理服务",
    )
    app.state.container = container

    # 添加中间件（注意顺序：后添加的先执行）
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth.router, prefix="/api/v1")
    app.include_router(users.router, prefix="/api/v1")
    app.include_router(orders.router, prefix="/api/v1")

    @app.get("/health", tags=["Health"])
    async def health_check():
        """健康检查端点"""
        return {"status": "healthy"}

    return app


async def serve(container: Optional[Container] = None) -> None:
    """同时运行 HTTP 与 gRPC 监听器，收到信号后按序优雅关闭

    关闭顺序：停止接收新连接 -> 等待在途请求（最多 SHUTDOWN_GRACE_SECONDS）-> 释放存储句柄。
    """
    container = container or build_container()
    config = container.settings

    app = create_app(container)
    http_server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=config.HTTP_HOST,
            port=config.HTTP_PORT,
            log_config=None,
            timeout_graceful_shutdown=int(config.SHUTDOWN_GRACE_SECONDS),
        )
    )
    # 信号由这里统一处理，避免 uvicorn 独占
    http_server.install_signal_handlers = lambda: None

    grpc_server = None
    if config.grpc.enabled:
        grpc_server, port = await create_server(container)
        await grpc_server.start()
        logger.info("grpc_started", address=f"{config.grpc.host}:{port}")
    else:
        logger.warning("grpc_disabled", message="gRPC disabled by config (GRPC__ENABLED=false)")

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows 事件循环不支持 add_signal_handler
            signal.signal(sig, lambda *_: loop.call_soon_threadsafe(stop_event.set))

    http_task = asyncio.create_task(http_server.serve())
    logger.info("http_starting", address=f"{config.HTTP_HOST}:{config.HTTP_PORT}")
    stop_task = asyncio.create_task(stop_event.wait())

    try:
        done, _ = await asyncio.wait({http_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
        if http_task in done and http_task.exception() is not None:
            logger.error("http_server_failed", error=str(http_task.exception()))
    finally:
        logger.info("shutdown_started", grace_seconds=config.SHUTDOWN_GRACE_SECONDS)
        stop_task.cancel()
        http_server.should_exit = True
        shutdowns = [http_task]
        if grpc_server is not None:
            shutdowns.append(grpc_server.stop(grace=config.SHUTDOWN_GRACE_SECONDS))
        await asyncio.gather(*shutdowns, return_exceptions=True)
        await container.close()
        logger.info("shutdown_completed")


if __name__ == "__main__":
    asyncio.run(serve())
