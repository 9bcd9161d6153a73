"""gRPC transport layer for the application.

This package hosts:
- Protocol buffers (in `protos/`), compiled into Python modules at import time by `generated`.
- Server bootstrap and interceptors.
- Thin service adapters that map gRPC requests to application services.
"""
