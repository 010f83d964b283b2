# pos_register/session.py
import logging
from dataclasses import dataclass
from typing import Optional, Union

from pos_register.exceptions import CheckoutInProgressError
from pos_register.models.cart import Cart, CartLine
from pos_register.schemas.product import Product
from pos_register.schemas.purchase import PurchaseResult, StationContext
from pos_register.utils.audit import write_log
from pos_register.utils.checkout import CheckoutOrchestrator

logger = logging.getLogger(__name__)


# Resolved (or operator-typed) product waiting to be added to the cart
@dataclass
class StagedProduct:
    code: str = ""
    name: str = ""
    price: Union[int, str, None] = None  # Typed prices stay text until added
    product_id: Optional[int] = None

    @classmethod
    def from_product(cls, product: Product) -> "StagedProduct":
        return cls(code=product.code, name=product.name, price=product.price, product_id=product.product_id)

    def clear(self) -> None:
        self.code, self.name, self.price, self.product_id = "", "", None, None


class RegisterSession:
    """State of one register: staged product, cart and station context.

    Every operator action is a method call. ``lookup`` and ``checkout`` await
    the backend; everything else is synchronous. One instance per register,
    nothing is shared between sessions.
    """

    def __init__(self, lookup_client, purchase_client, station: StationContext):
        self.lookup_client = lookup_client
        self.orchestrator = CheckoutOrchestrator(purchase_client)
        self.station = station
        self.cart = Cart()
        self.staged = StagedProduct()
        self._generation = 0
        self._checking_out = False

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    async def lookup(self, code: str) -> Optional[Product]:
        """Resolve ``code`` and stage the result.

        If the operator started another lookup or edited the staged fields
        while this one was in flight, the response is returned but not staged.
        """
        if not code or not code.strip():
            raise ValueError("Product code must not be empty")

        token = self._next_generation()
        product = await self.lookup_client.lookup(code)

        if token != self._generation:
            logger.info("Discarding stale lookup response for %r", code)
            return product

        if product is None:
            self.staged = StagedProduct(code=code)
        else:
            self.staged = StagedProduct.from_product(product)
        write_log(action="LOOKUP", resource="product", status="FOUND" if product else "NOT_FOUND",
                  meta={"code": code})
        return product

    def stage(self, code: str, name: str, price) -> StagedProduct:
        # Manual edits win over any lookup still in flight
        self._next_generation()
        product_id = self.staged.product_id if code == self.staged.code else None
        self.staged = StagedProduct(code=code, name=name, price=price, product_id=product_id)
        return self.staged

    def discard_staged(self) -> None:
        self._next_generation()
        self.staged.clear()

    def commit_staged(self) -> Optional[CartLine]:
        """Add the staged product to the cart; ``None`` if staging is incomplete.

        Raises ``CheckoutInProgressError`` while a purchase is in flight, since
        the submitted cart is cleared as a whole once the backend confirms.
        """
        if self._checking_out:
            raise CheckoutInProgressError("Checkout in progress")

        staged = self.staged
        line = self.cart.add_line(staged.code, staged.name, staged.price, product_id=staged.product_id)
        if line is None:
            return None

        staged.clear()
        write_log(action="CART_ADD", resource="cart", status="SUCCESS",
                  meta={"code": line.code, "qty": line.qty, "subtotal": self.cart.subtotal()})
        return line

    async def checkout(self) -> PurchaseResult:
        # Cart is cleared only once the backend confirms; failures leave it for a retry
        if self._checking_out:
            raise CheckoutInProgressError("Checkout in progress")

        self._checking_out = True
        try:
            result = await self.orchestrator.checkout(self.cart, self.station)
        finally:
            self._checking_out = False
        self.cart.clear()
        return result
