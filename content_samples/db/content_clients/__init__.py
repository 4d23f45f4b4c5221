"""
Content API REST clients organized by resource.
"""

from .accounts_client import AccountsClient, must_be_mca, must_not_be_mca
from .base_client import BaseContentClient
from .orders_client import OrdersClient
from .unified_client import ContentAPIClient

__all__ = [
    "AccountsClient",
    "BaseContentClient",
    "ContentAPIClient",
    "OrdersClient",
    "must_be_mca",
    "must_not_be_mca",
]
