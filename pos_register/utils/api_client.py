# pos_register/utils/api_client.py
import httpx
import logging
from typing import Optional, Type
from urllib.parse import urljoin
from pydantic import ValidationError

from pos_register.config import settings
from pos_register.exceptions import BackendError, ProductLookupError, PurchaseError
from pos_register.schemas.product import Product
from pos_register.schemas.purchase import PurchaseRequest, PurchaseResult

logger = logging.getLogger(__name__)


class _BackendClient:
    error_class: Type[BackendError] = BackendError

    def __init__(self, api_url: Optional[str] = None, timeout: Optional[float] = None, transport=None):
        self.api_url = api_url or settings.API_BASE_URL
        self.timeout = settings.HTTP_TIMEOUT_SECONDS if timeout is None else timeout
        # Lets tests swap the network for httpx.MockTransport
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = urljoin(self.api_url, path)
        async with self._client() as client:
            try:
                response = await client.request(method, url, **kwargs)
            except httpx.RequestError as e:
                logger.error(f"{method} {url} failed: {e!r}")
                raise self.error_class(f"Backend unreachable: {e}") from e
        return response

    def _raise_for_status(self, response: httpx.Response, what: str) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"{what} error ({response.status_code}): {response.text[:500]}")
            raise self.error_class(
                f"{what} failed ({response.status_code})", status_code=response.status_code
            ) from e


class ProductLookupClient(_BackendClient):
    error_class = ProductLookupError

    def __init__(self, *args, not_found_on_404: Optional[bool] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.path = settings.PRODUCT_LOOKUP_PATH
        self.not_found_on_404 = (
            settings.LOOKUP_NOT_FOUND_ON_404 if not_found_on_404 is None else not_found_on_404
        )

    async def lookup(self, code: str) -> Optional[Product]:
        """Resolve a scanned code. Returns ``None`` when no product has that code."""
        if not code or not code.strip():
            raise ValueError("Product code must not be empty")

        response = await self._send("GET", self.path, params={"code": code})
        if response.status_code == 404 and self.not_found_on_404:
            return None
        self._raise_for_status(response, "Product lookup")

        # Backend answers an unknown code with null (or an empty body)
        if not response.content.strip():
            return None
        try:
            data = response.json()
            if not data:
                return None
            return Product.model_validate(data)
        except (ValueError, ValidationError) as e:
            # json decode errors are ValueErrors
            logger.error(f"Malformed product lookup response for {code!r}: {response.text[:500]}")
            raise ProductLookupError(
                "Malformed product lookup response", status_code=response.status_code
            ) from e


class PurchaseClient(_BackendClient):
    error_class = PurchaseError

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.path = settings.PURCHASE_PATH

    async def submit(self, request: PurchaseRequest) -> PurchaseResult:
        # success=false comes back as-is; deciding what it means is the caller's job
        response = await self._send("POST", self.path, json=request.model_dump(mode="json"))
        self._raise_for_status(response, "Purchase")
        try:
            return PurchaseResult.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Malformed purchase response: {response.text[:500]}")
            raise PurchaseError(
                "Malformed purchase response", status_code=response.status_code
            ) from e


product_lookup_client = ProductLookupClient()
purchase_client = PurchaseClient()
