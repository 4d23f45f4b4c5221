"""
Pydantic schemas for Content API request and response bodies.
"""

from .accounts import Account, AccountIdentifier, AccountsAuthInfoResponse
from .orders import (
    CancelReason,
    ExecutionStatus,
    Order,
    OrderLineItem,
    OrdersAcknowledgeRequest,
    OrdersCancelLineItemRequest,
    OrdersCreateTestOrderRequest,
    OrdersCreateTestOrderResponse,
    OrderShipment,
    OrderShipmentLineItemShipment,
    OrdersListResponse,
    OrdersOperationResponse,
    OrdersReturnLineItemRequest,
    OrdersShipLineItemsRequest,
    OrdersUpdateMerchantOrderIdRequest,
    OrdersUpdateShipmentRequest,
    ReturnReason,
    ShipmentStatus,
)

__all__ = [
    "Account",
    "AccountIdentifier",
    "AccountsAuthInfoResponse",
    "CancelReason",
    "ExecutionStatus",
    "Order",
    "OrderLineItem",
    "OrderShipment",
    "OrderShipmentLineItemShipment",
    "OrdersAcknowledgeRequest",
    "OrdersCancelLineItemRequest",
    "OrdersCreateTestOrderRequest",
    "OrdersCreateTestOrderResponse",
    "OrdersListResponse",
    "OrdersOperationResponse",
    "OrdersReturnLineItemRequest",
    "OrdersShipLineItemsRequest",
    "OrdersUpdateMerchantOrderIdRequest",
    "OrdersUpdateShipmentRequest",
    "ReturnReason",
    "ShipmentStatus",
]
