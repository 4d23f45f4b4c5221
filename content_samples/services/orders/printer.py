"""
Console rendering of order snapshots.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from content_samples.schemas.orders import Order


class OrderPrinter:
    """Prints order snapshots to a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def _line(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False)

    def print_order(self, order: Order) -> None:
        self._line(f"Order {order.id}:")
        self._line(f"- Merchant order ID: {order.merchant_order_id or '(none)'}")
        self._line(f"- Status: {order.status or 'unknown'}")
        self._line(f"- Acknowledged: {'yes' if order.acknowledged else 'no'}")
        if order.placed_date:
            self._line(f"- Placed: {order.placed_date}")

        if not order.line_items:
            self._line("- No line items.")
        else:
            self._line(f"- {len(order.line_items)} line item(s):")
            self.console.print(self._line_items_table(order))

        if not order.shipments:
            self._line("- No shipments.")
        else:
            self._line(f"- {len(order.shipments)} shipment(s):")
            for shipment in order.shipments:
                self._line(
                    f"  - {shipment.id}: carrier {shipment.carrier or '?'}, "
                    f"tracking {shipment.tracking_id or '?'}, status {shipment.status or '?'}"
                )

    def _line_items_table(self, order: Order) -> Table:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Line item", no_wrap=True)
        table.add_column("Title")
        table.add_column("Carrier")
        for header in ("Ordered", "Pending", "Shipped", "Delivered", "Canceled", "Returned"):
            table.add_column(header, justify="right")

        for item in order.line_items:
            table.add_row(
                escape(item.id),
                escape(item.product.title or ""),
                escape(item.carrier or ""),
                str(item.quantity_ordered),
                str(item.quantity_pending),
                str(item.quantity_shipped),
                str(item.quantity_delivered),
                str(item.quantity_canceled),
                str(item.quantity_returned),
            )
        return table
