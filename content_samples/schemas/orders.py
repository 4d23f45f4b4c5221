"""
Pydantic models for the Content API orders resource.

Field names are snake_case in Python and camelCase on the wire. Unknown fields
returned by the API are kept on the models so snapshots round-trip intact.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContentModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_api(self) -> dict:
        """Serialize as a request body."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ExecutionStatus(str, Enum):
    """Execution statuses returned by mutating order calls."""

    EXECUTED = "executed"
    DUPLICATE = "duplicate"


class CancelReason(str, Enum):
    NO_INVENTORY = "noInventory"
    CUSTOMER_CANCELED = "customerCanceled"
    MALFORMED_SHIPPING_ADDRESS = "malformedShippingAddress"
    OTHER = "other"


class ReturnReason(str, Enum):
    PRODUCT_ARRIVED_DAMAGED = "productArrivedDamaged"
    CUSTOMER_DISCRETIONARY_RETURN = "customerDiscretionaryReturn"
    WRONG_PRODUCT_SHIPPED = "wrongProductShipped"
    OTHER = "other"


class ShipmentStatus(str, Enum):
    DELIVERED = "delivered"
    UNDELIVERABLE = "undeliverable"


# Order snapshot models


class OrderLineItemProduct(ContentModel):
    id: Optional[str] = None
    offer_id: Optional[str] = None
    title: Optional[str] = None


class OrderLineItemShippingDetailsMethod(ContentModel):
    carrier: Optional[str] = None
    method_name: Optional[str] = None
    min_days_in_transit: Optional[int] = None
    max_days_in_transit: Optional[int] = None


class OrderLineItemShippingDetails(ContentModel):
    method: OrderLineItemShippingDetailsMethod = Field(default_factory=OrderLineItemShippingDetailsMethod)
    deliver_by_date: Optional[str] = None
    ship_by_date: Optional[str] = None


class OrderLineItem(ContentModel):
    """A line item of an order snapshot."""

    id: str
    product: OrderLineItemProduct = Field(default_factory=OrderLineItemProduct)
    quantity_ordered: int = 0
    quantity_pending: int = 0
    quantity_shipped: int = 0
    quantity_delivered: int = 0
    quantity_canceled: int = 0
    quantity_returned: int = 0
    shipping_details: OrderLineItemShippingDetails = Field(default_factory=OrderLineItemShippingDetails)

    @property
    def carrier(self) -> Optional[str]:
        return self.shipping_details.method.carrier


class OrderShipmentLineItemShipment(ContentModel):
    line_item_id: str
    quantity: int


class OrderShipment(ContentModel):
    id: str
    carrier: Optional[str] = None
    tracking_id: Optional[str] = None
    status: Optional[str] = None
    creation_date: Optional[str] = None
    delivery_date: Optional[str] = None
    line_items: List[OrderShipmentLineItemShipment] = Field(default_factory=list)


class Order(ContentModel):
    """Snapshot of an order as returned by the API."""

    id: str
    merchant_id: Optional[str] = None
    merchant_order_id: Optional[str] = None
    status: Optional[str] = None
    acknowledged: Optional[bool] = None
    placed_date: Optional[str] = None
    line_items: List[OrderLineItem] = Field(default_factory=list)
    shipments: List[OrderShipment] = Field(default_factory=list)


# Requests


class OrdersCreateTestOrderRequest(ContentModel):
    template_name: str


class OrdersAcknowledgeRequest(ContentModel):
    operation_id: str


class OrdersUpdateMerchantOrderIdRequest(ContentModel):
    operation_id: str
    merchant_order_id: str


class OrdersCancelLineItemRequest(ContentModel):
    operation_id: str
    line_item_id: str
    quantity: int
    reason: str
    reason_text: str


class OrdersShipLineItemsRequest(ContentModel):
    operation_id: str
    line_items: List[OrderShipmentLineItemShipment]
    carrier: Optional[str] = None
    shipment_id: str
    tracking_id: str


class OrdersUpdateShipmentRequest(ContentModel):
    operation_id: str
    shipment_id: str
    carrier: Optional[str] = None
    tracking_id: Optional[str] = None
    status: str


class OrdersReturnLineItemRequest(ContentModel):
    operation_id: str
    line_item_id: str
    quantity: int
    reason: str
    reason_text: str


# Responses


class OrdersCreateTestOrderResponse(ContentModel):
    order_id: str


class OrdersListResponse(ContentModel):
    resources: List[Order] = Field(default_factory=list)
    next_page_token: Optional[str] = None


class OrdersOperationResponse(ContentModel):
    """Response of every mutating order call."""

    execution_status: Optional[str] = None
