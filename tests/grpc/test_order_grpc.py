import grpc
import pytest

from grpc_app.generated import order_pb2, order_pb2_grpc


pytestmark = pytest.mark.asyncio


async def test_order_lifecycle_over_grpc(grpc_target):
    async with grpc.aio.insecure_channel(grpc_target) as channel:
        stub = order_pb2_grpc.OrderServiceStub(channel)

        created = await stub.CreateOrder(order_pb2.CreateOrderRequest(total=100.50))
        assert created.order.id > 0
        assert created.order.total == pytest.approx(100.50)

        patched = await stub.PatchOrder(order_pb2.PatchOrderRequest(id=created.order.id, total=250.0))
        assert patched.order.total == pytest.approx(250.0)

        got = await stub.FindOrderByID(order_pb2.OrderIdRequest(id=created.order.id))
        assert got.order.total == pytest.approx(250.0)

        listed = await stub.FindAllOrders(order_pb2.FindAllOrdersRequest())
        assert [o.id for o in listed.orders] == [created.order.id]

        deleted = await stub.DeleteOrder(order_pb2.OrderIdRequest(id=created.order.id))
        assert deleted.message == "order deleted"

        with pytest.raises(grpc.aio.AioRpcError) as ei:
            await stub.FindOrderByID(order_pb2.OrderIdRequest(id=created.order.id))
        assert ei.value.code() == grpc.StatusCode.NOT_FOUND
        assert ei.value.details() == "order not found"
        md = dict(ei.value.trailing_metadata())
        assert md["x-biz-code"] == "20007"
        assert md["x-error-type"] == "OrderNotFound"


@pytest.mark.parametrize("total", [0.0, -1.0])
async def test_create_non_positive_total_is_invalid_argument(grpc_target, total):
    async with grpc.aio.insecure_channel(grpc_target) as channel:
        stub = order_pb2_grpc.OrderServiceStub(channel)
        with pytest.raises(grpc.aio.AioRpcError) as ei:
            await stub.CreateOrder(order_pb2.CreateOrderRequest(total=total))
        assert ei.value.code() == grpc.StatusCode.INVALID_ARGUMENT
        assert dict(ei.value.trailing_metadata())["x-biz-code"] == "10003"


async def test_patch_with_unset_total_is_invalid_argument(grpc_target):
    async with grpc.aio.insecure_channel(grpc_target) as channel:
        stub = order_pb2_grpc.OrderServiceStub(channel)
        created = await stub.CreateOrder(order_pb2.CreateOrderRequest(total=5.0))

        with pytest.raises(grpc.aio.AioRpcError) as ei:
            await stub.PatchOrder(order_pb2.PatchOrderRequest(id=created.order.id))
        assert ei.value.code() == grpc.StatusCode.INVALID_ARGUMENT

        # explicit zero is present on the wire and rejected as a value
        with pytest.raises(grpc.aio.AioRpcError) as ei:
            await stub.PatchOrder(order_pb2.PatchOrderRequest(id=created.order.id, total=0.0))
        assert ei.value.code() == grpc.StatusCode.INVALID_ARGUMENT

        got = await stub.FindOrderByID(order_pb2.OrderIdRequest(id=created.order.id))
        assert got.order.total == pytest.approx(5.0)


async def test_unexpected_error_is_internal(grpc_target, container, monkeypatch):
    async def boom():
        raise RuntimeError("database is on fire")

    monkeypatch.setattr(container.order_service, "find_all_orders", boom)
    async with grpc.aio.insecure_channel(grpc_target) as channel:
        stub = order_pb2_grpc.OrderServiceStub(channel)
        with pytest.raises(grpc.aio.AioRpcError) as ei:
            await stub.FindAllOrders(order_pb2.FindAllOrdersRequest())
        assert ei.value.code() == grpc.StatusCode.INTERNAL
        assert ei.value.details() == "internal server error"


async def test_request_id_round_trips(grpc_target):
    async with grpc.aio.insecure_channel(grpc_target) as channel:
        stub = order_pb2_grpc.OrderServiceStub(channel)
        call = stub.FindAllOrders(order_pb2.FindAllOrdersRequest(), metadata=(("x-request-id", "rid-1"),))
        await call
        md = dict(await call.trailing_metadata())
        assert md["x-request-id"] == "rid-1"


@pytest.mark.parametrize("total", [0.001, 12.345, 1e10])
async def test_total_beyond_store_precision_is_invalid_argument(grpc_target, total):
    async with grpc.aio.insecure_channel(grpc_target) as channel:
        stub = order_pb2_grpc.OrderServiceStub(channel)
        with pytest.raises(grpc.aio.AioRpcError) as ei:
            await stub.CreateOrder(order_pb2.CreateOrderRequest(total=total))
        assert ei.value.code() == grpc.StatusCode.INVALID_ARGUMENT
        listed = await stub.FindAllOrders(order_pb2.FindAllOrdersRequest())
        assert list(listed.orders) == []


@pytest.mark.parametrize("order_id", [0, -1])
async def test_non_positive_id_is_invalid_argument(grpc_target, order_id):
    async with grpc.aio.insecure_channel(grpc_target) as channel:
        stub = order_pb2_grpc.OrderServiceStub(channel)
        with pytest.raises(grpc.aio.AioRpcError) as ei:
            await stub.FindOrderByID(order_pb2.OrderIdRequest(id=order_id))
        assert ei.value.code() == grpc.StatusCode.INVALID_ARGUMENT
        with pytest.raises(grpc.aio.AioRpcError) as ei:
            await stub.DeleteOrder(order_pb2.OrderIdRequest(id=order_id))
        assert ei.value.code() == grpc.StatusCode.INVALID_ARGUMENT
