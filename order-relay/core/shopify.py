import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from core.config import Settings
from core.errors import ShopifyAPIError

logger = logging.getLogger(__name__)


def _first_error_message(payload: Dict[str, Any]) -> Optional[str]:
    errors = payload.get("errors") if isinstance(payload, dict) else None
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict):
            return first.get("message")
        return str(first)
    # REST style errors ({"errors": "Not Found"}) on non-GraphQL failures
    if isinstance(errors, str):
        return errors
    return None


class ShopifyClient:
    """Thin client for the Shopify Admin GraphQL endpoint.

    A single POST per call, no retries. Pass ``session`` to reuse an
    existing ``aiohttp.ClientSession``; otherwise one is opened per call.
    """

    def __init__(self, settings: Settings, session: Optional[aiohttp.ClientSession] = None):
        self.settings = settings
        self._session = session

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": self.settings.admin_token or "",
        }

    def _timeout(self) -> Optional[aiohttp.ClientTimeout]:
        if self.settings.timeout_seconds is None:
            return None
        return aiohttp.ClientTimeout(total=self.settings.timeout_seconds)

    async def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        # Config is checked before any connection is opened
        self.settings.require_shopify()

        body = {"query": query, "variables": variables or {}}
        try:
            if self._session is not None:
                return await self._post(self._session, body)
            async with aiohttp.ClientSession() as session:
                return await self._post(session, body)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise ShopifyAPIError(f"Shopify API error: {str(exc) or type(exc).__name__}") from exc

    async def _post(self, session, body: Dict[str, Any]) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"json": body, "headers": self._headers()}
        timeout = self._timeout()
        if timeout is not None:
            kwargs["timeout"] = timeout

        async with session.post(self.settings.graphql_url, **kwargs) as resp:
            try:
                payload = await resp.json(content_type=None)
                parsed = isinstance(payload, dict)
            except ValueError:
                parsed = False
            if not parsed:
                payload = {}

            if not 200 <= resp.status < 300:
                message = _first_error_message(payload) or resp.reason or str(resp.status)
                logger.error(" [!] Shopify respondió %s: %s", resp.status, message)
                raise ShopifyAPIError(f"Shopify API error: {message}", http_status=resp.status)

        if payload.get("errors"):
            message = _first_error_message(payload)
            raise ShopifyAPIError(f"Shopify GraphQL error: {message}", http_status=resp.status)

        data = payload.get("data") if parsed else None
        if not isinstance(data, dict):
            raise ShopifyAPIError(
                "Respuesta inesperada de Shopify: falta data", http_status=resp.status
            )
        return data
