import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "order-relay"))

import pytest
from fastapi.testclient import TestClient

from core.config import Settings, get_settings
from core.errors import ShopifyAPIError


class FakeShopifyClient:
    """Records every GraphQL call and answers from a queue of canned responses."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    async def execute(self, query, variables=None):
        self.calls.append({"query": query, "variables": variables})
        if not self.responses:
            raise AssertionError("unexpected upstream call")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeResponse:
    """Stands in for an aiohttp response inside `async with session.post(...)`."""

    def __init__(self, status, body, reason="OK"):
        self.status = status
        self.reason = reason
        self._body = body

    async def json(self, content_type="application/json"):
        if isinstance(self._body, str):
            return json.loads(self._body)
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def post(self, url, **kwargs):
        self.requests.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


def variant_lookup(*variant_ids):
    return {"product": {"variants": {"edges": [{"node": {"id": v}} for v in variant_ids]}}}


def order_created(order=None, user_errors=None):
    return {"orderCreate": {"order": order, "userErrors": user_errors or []}}


@pytest.fixture
def settings():
    return Settings(store_domain="tienda-test.myshopify.com", admin_token="shpat_test")


@pytest.fixture
def fake_shopify():
    return FakeShopifyClient()


@pytest.fixture
def client(settings, fake_shopify):
    from main import app
    from routers.orders import get_shopify_client

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_shopify_client] = lambda: fake_shopify
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def upstream_failure():
    return ShopifyAPIError("Shopify GraphQL error: Access denied")
