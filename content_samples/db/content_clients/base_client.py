"""
Base Content API REST client with common functionality.

This module provides the foundation for the Content API clients: session
management, authentication headers, request execution and error mapping.
Requests are issued once; failures are raised to the caller.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientTimeout

from content_samples.core.config import get_settings
from content_samples.utils.error_handler import ContentAPIException

logger = logging.getLogger(__name__)


def parse_error_response(status: int, body: str) -> tuple[str, list[str]]:
    """
    Extract the message and reasons from a Content API error body.

    The API answers errors as ``{"error": {"code", "message", "errors": [{"reason", ...}]}}``;
    anything else falls back to the raw body.

    Returns:
        Tuple of (message, reasons)
    """
    try:
        payload = json.loads(body) if body else {}
    except json.JSONDecodeError:
        payload = {}

    error = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        return (body.strip() or f"HTTP {status}"), []

    message = error.get("message") or f"HTTP {status}"
    reasons = [item.get("reason") for item in error.get("errors", []) if isinstance(item, dict) and item.get("reason")]
    return message, reasons


class BaseContentClient:
    """
    Base client for Content API REST operations.

    Specialized clients are bound to a base URL (production or sandbox) and may
    share the session owned by another client.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Service base URL, ending with a slash
            access_token: OAuth2 bearer token
            session: Existing session to share (optional)
        """
        self.settings = get_settings()
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.access_token = access_token
        self.session = session
        self._owns_session = False

    async def initialize(self):
        """
        Create the HTTP session if none was shared with this client.
        """
        if self.session is not None:
            return

        timeout = ClientTimeout(
            total=self.settings.HTTP_TIMEOUT_SECONDS,
            connect=self.settings.HTTP_CONNECT_TIMEOUT_SECONDS,
        )
        self.session = aiohttp.ClientSession(
            timeout=timeout,
            headers={
                "Authorization": f"Bearer {self.access_token}",
                "Content-Type": "application/json",
                "User-Agent": f"{self.settings.APP_NAME.replace(' ', '-')}/{self.settings.APP_VERSION}",
            },
        )
        self._owns_session = True
        logger.debug(f"HTTP session created for {self.base_url}")

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self.session and self._owns_session:
            await self.session.close()
            logger.debug(f"HTTP session closed for {self.base_url}")
        self.session = None
        self._owns_session = False

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path.lstrip('/')}"

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Execute a single REST request.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            params: Query parameters; ``None`` values are dropped
            body: JSON body

        Returns:
            Dict: Decoded JSON response (empty for empty bodies)

        Raises:
            ContentAPIException: On HTTP errors, network errors or invalid JSON
        """
        if not self.session:
            raise ContentAPIException("Client not initialized. Call initialize() first.", endpoint=path)

        url = self._url(path)
        query = {key: _query_value(value) for key, value in (params or {}).items() if value is not None}
        logger.debug(f"{method} {url} params={query} body={body}")

        try:
            async with self.session.request(method, url, params=query or None, json=body) as response:
                text = await response.text()

                if response.status >= 400:
                    message, reasons = parse_error_response(response.status, text)
                    logger.error(f"{method} {path} failed with HTTP {response.status}: {message}")
                    raise ContentAPIException(
                        f"HTTP {response.status}: {message}",
                        api_response_code=response.status,
                        endpoint=path,
                        reasons=reasons,
                        rate_limited=response.status == 429,
                    )

                if not text.strip():
                    return {}

                try:
                    return json.loads(text)
                except json.JSONDecodeError as e:
                    raise ContentAPIException(
                        f"Invalid JSON response: {e}",
                        api_response_code=response.status,
                        endpoint=path,
                    ) from e

        except aiohttp.ClientError as e:
            logger.error(f"Network error calling {method} {path}: {e}")
            raise ContentAPIException(f"Network error: {str(e)}", endpoint=path) from e

        except asyncio.TimeoutError as e:
            logger.error(f"Timeout calling {method} {path}")
            raise ContentAPIException("Request timed out", endpoint=path) from e

    def __repr__(self):
        return f"{self.__class__.__name__}(base_url='{self.base_url}', initialized={self.session is not None})"


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
