"""
Unified Content API client combining the specialized clients.

Owns a single HTTP session shared by the orders client (sandbox service) and
the accounts client (production service).
"""

import logging

from content_samples.core.config import ServiceEndpoints

from .accounts_client import AccountsClient
from .base_client import BaseContentClient
from .orders_client import OrdersClient

logger = logging.getLogger(__name__)


class ContentAPIClient(BaseContentClient):
    """
    Unified Content API client.

    ``orders`` talks to the sandbox base URL so test orders can be created and
    mutated without touching real orders; ``accounts`` talks to production.
    """

    def __init__(self, endpoints: ServiceEndpoints, access_token: str):
        super().__init__(endpoints.base_url, access_token)
        self.endpoints = endpoints
        self.orders = OrdersClient(endpoints.sandbox_base_url, access_token)
        self.accounts = AccountsClient(endpoints.base_url, access_token)

    async def initialize(self):
        """Create the shared session and hand it to the specialized clients."""
        await super().initialize()
        for client in (self.orders, self.accounts):
            client.session = self.session
        logger.info(f"Content API client ready (production: {self.endpoints.base_url}, sandbox: {self.endpoints.sandbox_base_url})")

    async def close(self):
        # The specialized clients share the session, so only the owner closes it
        for client in (self.orders, self.accounts):
            client.session = None
        await super().close()
