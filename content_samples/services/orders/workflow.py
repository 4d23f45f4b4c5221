"""
Test order workflow on the Content API sandbox.

Runs one test order through its lifecycle: create, list, acknowledge, set the
merchant order id, cancel part of a line item, advance, ship both line items,
report both shipments delivered and return one item. The order is re-read and
printed after every mutation. Any failure aborts the run; nothing is retried
or rolled back.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from rich.console import Console

from content_samples.db.content_clients.orders_client import OrdersClient
from content_samples.domain.value_objects import ShipmentRecord
from content_samples.schemas.orders import (
    CancelReason,
    Order,
    OrderLineItem,
    OrderShipmentLineItemShipment,
    ReturnReason,
    ShipmentStatus,
)
from content_samples.utils.error_handler import ValidationException

from .operation_ids import OperationIdGenerator
from .printer import OrderPrinter

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "template1"
REQUIRED_LINE_ITEMS = 2


@dataclass
class WorkflowResult:
    """Outcome of a completed workflow run."""

    order_id: str
    merchant_order_id: str
    shipments: List[ShipmentRecord] = field(default_factory=list)
    execution_statuses: Dict[str, Optional[str]] = field(default_factory=dict)
    final_order: Optional[Order] = None


class OrdersWorkflow:
    """
    Drives a single test order through the fixed sequence of order calls.

    The workflow holds the orders client it talks to and owns the operation id
    counter for the run; every mutating call gets a fresh id from it.
    """

    def __init__(
        self,
        orders: OrdersClient,
        merchant_id: int,
        console: Optional[Console] = None,
        template_name: str = DEFAULT_TEMPLATE,
        page_size: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            orders: Orders client bound to the sandbox service
            merchant_id: Merchant account id
            console: Console for progress output
            template_name: Test order template
            page_size: Page size when listing orders (server default if None)
            rng: Source for merchant order, shipment and tracking ids
        """
        self.orders = orders
        self.merchant_id = merchant_id
        self.console = console or Console()
        self.printer = OrderPrinter(self.console)
        self.template_name = template_name
        self.page_size = page_size
        self.rng = rng or random.Random()
        self.operation_ids = OperationIdGenerator()
        self._statuses: Dict[str, Optional[str]] = {}

    def _say(self, text: str = "", end: str = "\n") -> None:
        self.console.print(text, end=end, markup=False, highlight=False)

    def _report(self, step: str, status: Optional[str]) -> None:
        self._statuses[step] = status
        self._say(f'done with status "{status}".')
        self._say()

    async def run(self) -> WorkflowResult:
        """
        Execute the whole workflow.

        Returns:
            WorkflowResult: Identifiers and statuses gathered along the way

        Raises:
            ValidationException: If the test order has fewer than two line items
            ContentAPIException: On the first failing remote call
        """
        self._statuses = {}
        logger.info(f"Starting orders workflow for merchant {self.merchant_id}")

        order_id = await self.create_test_order()
        await self.list_unacknowledged_orders()

        await self.acknowledge(order_id)
        await self.refresh(order_id)

        merchant_order_id = await self.update_merchant_order_id(order_id)
        current = await self.refresh(order_id)
        self.require_line_items(current)

        await self.cancel_line_item(order_id, current.line_items[0])
        await self.refresh(order_id)

        await self.advance_test_order(order_id)
        current = await self.refresh(order_id)

        # Partial fulfillment: ship whatever is still pending of the first item
        first_item = current.line_items[0]
        first_shipment = await self.ship_line_item(order_id, first_item, "first")
        current = await self.refresh(order_id)
        self.require_line_items(current)

        second_item = current.line_items[1]
        second_shipment = await self.ship_line_item(order_id, second_item, "second")
        await self.refresh(order_id)

        await self.deliver_shipment(order_id, first_shipment, "first")
        await self.refresh(order_id)

        await self.deliver_shipment(order_id, second_shipment, "second")
        await self.refresh(order_id)

        await self.return_line_item(order_id, first_item)
        final_order = await self.refresh(order_id)

        logger.info(f"Orders workflow finished for order {order_id} ({self.operation_ids.issued} operations)")
        return WorkflowResult(
            order_id=order_id,
            merchant_order_id=merchant_order_id,
            shipments=[first_shipment, second_shipment],
            execution_statuses=dict(self._statuses),
            final_order=final_order,
        )

    # =============================================================================
    # STEPS
    # =============================================================================

    async def create_test_order(self) -> str:
        self._say("Creating test order... ", end="")
        order_id = await self.orders.create_test_order(self.merchant_id, self.template_name)
        self._say("done.")
        self._say(f'Order "{order_id}" created.')
        self._say()
        return order_id

    async def list_unacknowledged_orders(self) -> List[Order]:
        self._say(f"Listing unacknowledged orders for merchant {self.merchant_id}:")
        listed: List[Order] = []
        async for page in self.orders.iter_order_pages(
            self.merchant_id, acknowledged=False, max_results=self.page_size
        ):
            for order in page.resources:
                self.printer.print_order(order)
                listed.append(order)
        self._say()
        logger.info(f"Listed {len(listed)} unacknowledged orders")
        return listed

    async def acknowledge(self, order_id: str) -> Optional[str]:
        self._say(f'Acknowledging order "{order_id}"... ', end="")
        response = await self.orders.acknowledge(self.merchant_id, order_id, self.operation_ids.next())
        self._report("acknowledge", response.execution_status)
        return response.execution_status

    async def update_merchant_order_id(self, order_id: str) -> str:
        merchant_order_id = f"test order {self.rng.getrandbits(63)}"
        self._say(f'Updating merchant order ID to "{merchant_order_id}"... ', end="")
        response = await self.orders.update_merchant_order_id(
            self.merchant_id, order_id, self.operation_ids.next(), merchant_order_id
        )
        self._report("update_merchant_order_id", response.execution_status)
        return merchant_order_id

    async def cancel_line_item(self, order_id: str, item: OrderLineItem) -> Optional[str]:
        self._say(f'Canceling one unit of line item "{item.id}"... ', end="")
        response = await self.orders.cancel_line_item(
            self.merchant_id,
            order_id,
            self.operation_ids.next(),
            line_item_id=item.id,
            quantity=1,
            reason=CancelReason.NO_INVENTORY.value,
            reason_text="Ran out of inventory while fulfilling request.",
        )
        self._report("cancel_line_item", response.execution_status)
        return response.execution_status

    async def advance_test_order(self, order_id: str) -> None:
        self._say("Advancing test order... ", end="")
        await self.orders.advance_test_order(self.merchant_id, order_id)
        self._say("done.")
        self._say()

    async def ship_line_item(self, order_id: str, item: OrderLineItem, label: str) -> ShipmentRecord:
        """Ship the pending quantity of ``item`` and return the new shipment's identifiers."""
        self._say(f"Notifying about shipment of {label} line item... ", end="")
        shipment = ShipmentRecord.generate(item.carrier, rng=self.rng)
        response = await self.orders.ship_line_items(
            self.merchant_id,
            order_id,
            self.operation_ids.next(),
            line_items=[OrderShipmentLineItemShipment(line_item_id=item.id, quantity=item.quantity_pending)],
            carrier=shipment.carrier,
            shipment_id=shipment.shipment_id,
            tracking_id=shipment.tracking_id,
        )
        self._report(f"ship_{label}_line_item", response.execution_status)
        return shipment

    async def deliver_shipment(self, order_id: str, shipment: ShipmentRecord, label: str) -> Optional[str]:
        self._say(f"Notifying about delivery of {label} line item... ", end="")
        response = await self.orders.update_shipment(
            self.merchant_id,
            order_id,
            self.operation_ids.next(),
            shipment_id=shipment.shipment_id,
            carrier=shipment.carrier,
            tracking_id=shipment.tracking_id,
            status=ShipmentStatus.DELIVERED.value,
        )
        self._report(f"deliver_{label}_shipment", response.execution_status)
        return response.execution_status

    async def return_line_item(self, order_id: str, item: OrderLineItem) -> Optional[str]:
        self._say("Notifying about return of first line item... ", end="")
        response = await self.orders.return_line_item(
            self.merchant_id,
            order_id,
            self.operation_ids.next(),
            line_item_id=item.id,
            quantity=1,
            reason=ReturnReason.PRODUCT_ARRIVED_DAMAGED.value,
            reason_text="Item malfunctioning upon receipt.",
        )
        self._report("return_line_item", response.execution_status)
        return response.execution_status

    async def refresh(self, order_id: str) -> Order:
        """Re-read the order and print the snapshot."""
        self._say(f'Retrieving order "{order_id}"... ', end="")
        order = await self.orders.get_order(self.merchant_id, order_id)
        self._say("done.")
        self._say()
        self.printer.print_order(order)
        self._say()
        return order

    def require_line_items(self, order: Order, count: int = REQUIRED_LINE_ITEMS) -> None:
        """
        The workflow cancels, ships and returns the first item and ships the
        second, so the test order must carry at least two line items.
        """
        if len(order.line_items) < count:
            raise ValidationException(
                f"Order {order.id} has {len(order.line_items)} line item(s); the workflow needs at least {count}",
                field="lineItems",
                invalid_value=len(order.line_items),
                expected_format=f"at least {count} line items",
            )
