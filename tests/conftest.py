"""Shared fixtures for the register test-suite."""

from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from pos_register.schemas.purchase import StationContext
from pos_register.utils.api_client import ProductLookupClient, PurchaseClient

API_URL = "http://pos-backend.test"

CATALOG = {
    "4901234567894": {"product_id": 1, "code": "4901234567894", "name": "Tea", "price": 150},
    "4909876543210": {"product_id": 2, "code": "4909876543210", "name": "Milk", "price": 200},
}


def json_response(status_code: int, payload) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={"content-type": "application/json"},
    )


class FakeBackend:
    """Minimal stand-in for the POS backend, wired through httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.purchase_status = 200
        self.purchase_success = True
        self.total_override: int | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/product":
            return json_response(200, CATALOG.get(request.url.params.get("code")))
        if request.url.path == "/purchase":
            if self.purchase_status != 200:
                return json_response(self.purchase_status, {"detail": "boom"})
            body = json.loads(request.content)
            total = sum(item["price"] * item["qty"] for item in body["items"])
            if self.total_override is not None:
                total = self.total_override
            return json_response(200, {"success": self.purchase_success, "total_amount": total})
        return json_response(404, {"detail": "Not Found"})

    @property
    def purchase_bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.url.path == "/purchase"]


@pytest.fixture
def station() -> StationContext:
    return StationContext(employee_code="1234567890", store_code="30", register_no="90")


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def make_lookup_client() -> Callable[..., ProductLookupClient]:
    def _make(handler, **kwargs) -> ProductLookupClient:
        return ProductLookupClient(api_url=API_URL, transport=httpx.MockTransport(handler), **kwargs)
    return _make


@pytest.fixture
def make_purchase_client() -> Callable[..., PurchaseClient]:
    def _make(handler) -> PurchaseClient:
        return PurchaseClient(api_url=API_URL, transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def lookup_client(backend, make_lookup_client) -> ProductLookupClient:
    return make_lookup_client(backend)


@pytest.fixture
def purchase_client(backend, make_purchase_client) -> PurchaseClient:
    return make_purchase_client(backend)
