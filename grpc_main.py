import asyncio
import signal

from bootstrap import build_container
from core.logging_config import get_logger
from grpc_app.server import create_server


logger = get_logger(__name__)


async def main() -> None:
    """Run the gRPC listener alone (the HTTP app is served by main.py)."""
    container = build_container()
    config = container.settings
    if not config.grpc.enabled:
        logger.warning("grpc_disabled", message="gRPC disabled by config (GRPC__ENABLED=false)")
        await container.close()
        return

    if config.DEBUG:
        await container.database.create_tables()

    server, port = await create_server(container)
    address = f"{config.grpc.host}:{port}"
    logger.info("grpc_starting", address=address)
    await server.start()
    logger.info("grpc_started", address=address)

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)

    try:
        await stop_event.wait()
    finally:
        logger.info("grpc_stopping", grace_seconds=config.SHUTDOWN_GRACE_SECONDS)
        await server.stop(grace=config.SHUTDOWN_GRACE_SECONDS)
        await container.close()
        logger.info("grpc_stopped")


if __name__ == "__main__":
    asyncio.run(main())
