"""Protobuf message and stub modules for the mess.v1 protos.

The .proto files under ``protos/`` are compiled at import time by grpcio-tools,
so no generated code is checked in.
"""
import os
import sys

import grpc


PROTO_ROOT = os.path.join(os.path.dirname(os.path.abspath(__file__)), "protos")

# grpcio-tools resolves proto paths (and their imports) against sys.path
if PROTO_ROOT not in sys.path:
    sys.path.append(PROTO_ROOT)

order_pb2, order_pb2_grpc = grpc.protos_and_services("mess/v1/order.proto")
user_pb2, user_pb2_grpc = grpc.protos_and_services("mess/v1/user.proto")

ORDER_SERVICE_NAME = order_pb2.DESCRIPTOR.services_by_name["OrderService"].full_name
USER_SERVICE_NAME = user_pb2.DESCRIPTOR.services_by_name["UserService"].full_name

__all__ = [
    "order_pb2",
    "order_pb2_grpc",
    "user_pb2",
    "user_pb2_grpc",
    "ORDER_SERVICE_NAME",
    "USER_SERVICE_NAME",
]
