"""Tests for the Content API orders client."""

from unittest.mock import AsyncMock

import pytest

from content_samples.db.content_clients.orders_client import OrdersClient
from content_samples.schemas.orders import OrderShipmentLineItemShipment

MERCHANT_ID = 123


@pytest.fixture
def client():
    orders_client = OrdersClient("https://api.test/content/v2sandbox/", "token")
    orders_client._request = AsyncMock()
    return orders_client


def order_payload(order_id: str, **extra):
    return {"kind": "content#order", "id": order_id, "lineItems": [], **extra}


class TestTestOrders:
    @pytest.mark.asyncio
    async def test_create_test_order(self, client):
        client._request.return_value = {"kind": "content#ordersCreateTestOrderResponse", "orderId": "ORD1"}

        order_id = await client.create_test_order(MERCHANT_ID, "template1")

        assert order_id == "ORD1"
        client._request.assert_awaited_once_with("POST", "123/testorders", body={"templateName": "template1"})

    @pytest.mark.asyncio
    async def test_advance_test_order(self, client):
        client._request.return_value = {}

        await client.advance_test_order(MERCHANT_ID, "ORD1")

        client._request.assert_awaited_once_with("POST", "123/testorders/ORD1/advance")


class TestReads:
    @pytest.mark.asyncio
    async def test_get_order_parses_snapshot(self, client):
        client._request.return_value = order_payload(
            "ORD1",
            merchantOrderId="test order 1",
            lineItems=[
                {
                    "id": "LI1",
                    "quantityOrdered": 2,
                    "quantityPending": 2,
                    "product": {"title": "Chromecast", "offerId": "cc"},
                    "shippingDetails": {"method": {"carrier": "UPS", "methodName": "Ground"}},
                }
            ],
        )

        order = await client.get_order(MERCHANT_ID, "ORD1")

        client._request.assert_awaited_once_with("GET", "123/orders/ORD1")
        assert order.merchant_order_id == "test order 1"
        item = order.line_items[0]
        assert item.quantity_pending == 2
        assert item.carrier == "UPS"
        assert item.product.title == "Chromecast"

    @pytest.mark.asyncio
    async def test_pages_follow_next_page_token(self, client):
        client._request.side_effect = [
            {"resources": [order_payload("A1"), order_payload("A2")], "nextPageToken": "p2"},
            {"resources": [order_payload("B1")], "nextPageToken": "p3"},
            {"resources": []},
        ]

        pages = [page async for page in client.iter_order_pages(MERCHANT_ID, acknowledged=False)]

        assert len(pages) == 3
        tokens = [call.kwargs["params"]["pageToken"] for call in client._request.await_args_list]
        assert tokens == [None, "p2", "p3"]
        for call in client._request.await_args_list:
            assert call.args == ("GET", "123/orders")
            assert call.kwargs["params"]["acknowledged"] is False

    @pytest.mark.asyncio
    async def test_list_orders_collects_every_page(self, client):
        client._request.side_effect = [
            {"resources": [order_payload("A1")], "nextPageToken": "p2"},
            {"resources": [order_payload("B1"), order_payload("B2")]},
        ]

        orders = await client.list_orders(MERCHANT_ID, acknowledged=False, max_results=2)

        assert [order.id for order in orders] == ["A1", "B1", "B2"]
        assert client._request.await_args_list[0].kwargs["params"]["maxResults"] == 2

    @pytest.mark.asyncio
    async def test_iteration_restarts_from_first_page(self, client):
        client._request.side_effect = [
            {"resources": [order_payload("A1")], "nextPageToken": "p2"},
            {"resources": [order_payload("B1")]},
            {"resources": [order_payload("A1")], "nextPageToken": "p2"},
            {"resources": [order_payload("B1")]},
        ]

        first = await client.list_orders(MERCHANT_ID)
        second = await client.list_orders(MERCHANT_ID)

        assert [o.id for o in first] == [o.id for o in second] == ["A1", "B1"]
        tokens = [call.kwargs["params"]["pageToken"] for call in client._request.await_args_list]
        assert tokens == [None, "p2", None, "p2"]


class TestMutations:
    @pytest.mark.asyncio
    async def test_acknowledge(self, client):
        client._request.return_value = {"executionStatus": "executed"}

        response = await client.acknowledge(MERCHANT_ID, "ORD1", "0")

        assert response.execution_status == "executed"
        client._request.assert_awaited_once_with("POST", "123/orders/ORD1/acknowledge", body={"operationId": "0"})

    @pytest.mark.asyncio
    async def test_update_merchant_order_id(self, client):
        client._request.return_value = {"executionStatus": "executed"}

        await client.update_merchant_order_id(MERCHANT_ID, "ORD1", "1", "test order 42")

        client._request.assert_awaited_once_with(
            "POST",
            "123/orders/ORD1/updateMerchantOrderId",
            body={"operationId": "1", "merchantOrderId": "test order 42"},
        )

    @pytest.mark.asyncio
    async def test_cancel_line_item(self, client):
        client._request.return_value = {"executionStatus": "executed"}

        await client.cancel_line_item(
            MERCHANT_ID, "ORD1", "2", line_item_id="LI1", quantity=1, reason="noInventory", reason_text="Out"
        )

        client._request.assert_awaited_once_with(
            "POST",
            "123/orders/ORD1/cancelLineItem",
            body={"operationId": "2", "lineItemId": "LI1", "quantity": 1, "reason": "noInventory", "reasonText": "Out"},
        )

    @pytest.mark.asyncio
    async def test_ship_line_items(self, client):
        client._request.return_value = {"executionStatus": "executed"}

        await client.ship_line_items(
            MERCHANT_ID,
            "ORD1",
            "3",
            line_items=[OrderShipmentLineItemShipment(line_item_id="LI1", quantity=2)],
            carrier="UPS",
            shipment_id="111",
            tracking_id="222",
        )

        client._request.assert_awaited_once_with(
            "POST",
            "123/orders/ORD1/shipLineItems",
            body={
                "operationId": "3",
                "lineItems": [{"lineItemId": "LI1", "quantity": 2}],
                "carrier": "UPS",
                "shipmentId": "111",
                "trackingId": "222",
            },
        )

    @pytest.mark.asyncio
    async def test_update_shipment(self, client):
        client._request.return_value = {"executionStatus": "duplicate"}

        response = await client.update_shipment(
            MERCHANT_ID, "ORD1", "5", shipment_id="111", carrier="UPS", tracking_id="222", status="delivered"
        )

        assert response.execution_status == "duplicate"
        client._request.assert_awaited_once_with(
            "POST",
            "123/orders/ORD1/updateShipment",
            body={"operationId": "5", "shipmentId": "111", "carrier": "UPS", "trackingId": "222", "status": "delivered"},
        )

    @pytest.mark.asyncio
    async def test_return_line_item(self, client):
        client._request.return_value = {"executionStatus": "executed"}

        await client.return_line_item(
            MERCHANT_ID,
            "ORD1",
            "7",
            line_item_id="LI1",
            quantity=1,
            reason="productArrivedDamaged",
            reason_text="Broken",
        )

        client._request.assert_awaited_once_with(
            "POST",
            "123/orders/ORD1/returnLineItem",
            body={
                "operationId": "7",
                "lineItemId": "LI1",
                "quantity": 1,
                "reason": "productArrivedDamaged",
                "reasonText": "Broken",
            },
        )
