"""
Orders client for the Content API.

Wraps the orders and test-order methods of the sandbox service. Listing is
exposed as an async iterator of pages following ``nextPageToken``.
"""

import logging
from typing import AsyncIterator, List, Optional

from content_samples.schemas.orders import (
    Order,
    OrderShipmentLineItemShipment,
    OrdersAcknowledgeRequest,
    OrdersCancelLineItemRequest,
    OrdersCreateTestOrderRequest,
    OrdersCreateTestOrderResponse,
    OrdersListResponse,
    OrdersOperationResponse,
    OrdersReturnLineItemRequest,
    OrdersShipLineItemsRequest,
    OrdersUpdateMerchantOrderIdRequest,
    OrdersUpdateShipmentRequest,
)

from .base_client import BaseContentClient

logger = logging.getLogger(__name__)


class OrdersClient(BaseContentClient):
    """
    Client for the orders resource.

    Every mutating method takes the caller's operation id; the client never
    generates or reuses one on its own.
    """

    def _order_path(self, merchant_id: int, order_id: str, action: Optional[str] = None) -> str:
        path = f"{merchant_id}/orders/{order_id}"
        return f"{path}/{action}" if action else path

    async def _operation(self, merchant_id: int, order_id: str, action: str, request) -> OrdersOperationResponse:
        data = await self._request("POST", self._order_path(merchant_id, order_id, action), body=request.to_api())
        response = OrdersOperationResponse.model_validate(data)
        logger.info(f"{action} on order {order_id}: {response.execution_status}")
        return response

    # =============================================================================
    # TEST ORDERS (sandbox only)
    # =============================================================================

    async def create_test_order(self, merchant_id: int, template_name: str) -> str:
        """
        Create a test order from a predefined template.

        Returns:
            str: Id of the new order
        """
        request = OrdersCreateTestOrderRequest(template_name=template_name)
        data = await self._request("POST", f"{merchant_id}/testorders", body=request.to_api())
        order_id = OrdersCreateTestOrderResponse.model_validate(data).order_id
        logger.info(f"Created test order {order_id} from template {template_name}")
        return order_id

    async def advance_test_order(self, merchant_id: int, order_id: str) -> None:
        """Move a test order to the shippable state."""
        await self._request("POST", f"{merchant_id}/testorders/{order_id}/advance")
        logger.info(f"Advanced test order {order_id}")

    # =============================================================================
    # READS
    # =============================================================================

    async def get_order(self, merchant_id: int, order_id: str) -> Order:
        data = await self._request("GET", self._order_path(merchant_id, order_id))
        return Order.model_validate(data)

    async def iter_order_pages(
        self,
        merchant_id: int,
        acknowledged: Optional[bool] = None,
        max_results: Optional[int] = None,
    ) -> AsyncIterator[OrdersListResponse]:
        """
        Iterate over pages of orders.

        Each iteration starts again from the first page and stops after the
        first page that carries no ``nextPageToken``.

        Args:
            merchant_id: Merchant account id
            acknowledged: Filter on the acknowledged flag (None for all orders)
            max_results: Page size (server default if None)

        Yields:
            OrdersListResponse: One page of orders
        """
        page_token: Optional[str] = None
        page_number = 0

        while True:
            data = await self._request(
                "GET",
                f"{merchant_id}/orders",
                params={
                    "acknowledged": acknowledged,
                    "maxResults": max_results,
                    "pageToken": page_token,
                },
            )
            page = OrdersListResponse.model_validate(data)
            page_number += 1
            logger.debug(f"Fetched orders page {page_number} with {len(page.resources)} orders")
            yield page

            if not page.next_page_token:
                break
            page_token = page.next_page_token

    async def list_orders(
        self,
        merchant_id: int,
        acknowledged: Optional[bool] = None,
        max_results: Optional[int] = None,
    ) -> List[Order]:
        """Collect the orders of every page."""
        orders: List[Order] = []
        async for page in self.iter_order_pages(merchant_id, acknowledged=acknowledged, max_results=max_results):
            orders.extend(page.resources)
        return orders

    # =============================================================================
    # MUTATIONS
    # =============================================================================

    async def acknowledge(self, merchant_id: int, order_id: str, operation_id: str) -> OrdersOperationResponse:
        request = OrdersAcknowledgeRequest(operation_id=operation_id)
        return await self._operation(merchant_id, order_id, "acknowledge", request)

    async def update_merchant_order_id(
        self, merchant_id: int, order_id: str, operation_id: str, merchant_order_id: str
    ) -> OrdersOperationResponse:
        request = OrdersUpdateMerchantOrderIdRequest(operation_id=operation_id, merchant_order_id=merchant_order_id)
        return await self._operation(merchant_id, order_id, "updateMerchantOrderId", request)

    async def cancel_line_item(
        self,
        merchant_id: int,
        order_id: str,
        operation_id: str,
        line_item_id: str,
        quantity: int,
        reason: str,
        reason_text: str,
    ) -> OrdersOperationResponse:
        request = OrdersCancelLineItemRequest(
            operation_id=operation_id,
            line_item_id=line_item_id,
            quantity=quantity,
            reason=reason,
            reason_text=reason_text,
        )
        return await self._operation(merchant_id, order_id, "cancelLineItem", request)

    async def ship_line_items(
        self,
        merchant_id: int,
        order_id: str,
        operation_id: str,
        line_items: List[OrderShipmentLineItemShipment],
        carrier: Optional[str],
        shipment_id: str,
        tracking_id: str,
    ) -> OrdersOperationResponse:
        request = OrdersShipLineItemsRequest(
            operation_id=operation_id,
            line_items=line_items,
            carrier=carrier,
            shipment_id=shipment_id,
            tracking_id=tracking_id,
        )
        return await self._operation(merchant_id, order_id, "shipLineItems", request)

    async def update_shipment(
        self,
        merchant_id: int,
        order_id: str,
        operation_id: str,
        shipment_id: str,
        carrier: Optional[str],
        tracking_id: Optional[str],
        status: str,
    ) -> OrdersOperationResponse:
        request = OrdersUpdateShipmentRequest(
            operation_id=operation_id,
            shipment_id=shipment_id,
            carrier=carrier,
            tracking_id=tracking_id,
            status=status,
        )
        return await self._operation(merchant_id, order_id, "updateShipment", request)

    async def return_line_item(
        self,
        merchant_id: int,
        order_id: str,
        operation_id: str,
        line_item_id: str,
        quantity: int,
        reason: str,
        reason_text: str,
    ) -> OrdersOperationResponse:
        request = OrdersReturnLineItemRequest(
            operation_id=operation_id,
            line_item_id=line_item_id,
            quantity=quantity,
            reason=reason,
            reason_text=reason_text,
        )
        return await self._operation(merchant_id, order_id, "returnLineItem", request)
