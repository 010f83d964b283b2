# pos_register/utils/checkout.py
import logging

from pos_register.exceptions import PurchaseRejectedError
from pos_register.models.cart import Cart
from pos_register.schemas.purchase import (
    PurchaseItem, PurchaseRequest, PurchaseResult, StationContext
)
from pos_register.utils.audit import write_log

logger = logging.getLogger(__name__)


def build_purchase_request(cart: Cart, station: StationContext) -> PurchaseRequest:
    # One item per cart line, in cart order
    items = []
    for line in cart.lines():
        if line.product_id is None:
            logger.warning("Cart line %r has no product id; sending null", line.code)
        items.append(PurchaseItem(
            product_id=line.product_id,
            code=line.code,
            name=line.name,
            price=line.price,
            qty=line.qty,
        ))
    return PurchaseRequest(**station.model_dump(), items=items)


class CheckoutOrchestrator:
    """Submits a cart as a purchase and reports the backend's total.

    The cart is never modified here; clearing it after a confirmed purchase
    is up to the caller.
    """

    def __init__(self, purchase_client):
        self.purchase_client = purchase_client

    async def checkout(self, cart: Cart, station: StationContext) -> PurchaseResult:
        request = build_purchase_request(cart, station)
        subtotal = cart.subtotal()
        if not request.items:
            logger.warning("Submitting an empty purchase (register %s)", station.register_no)

        try:
            result = await self.purchase_client.submit(request)
        except Exception:
            write_log(action="CHECKOUT", resource="purchase", status="FAILED",
                      meta={"lines": len(request.items), "subtotal": subtotal})
            raise

        if not result.success:
            write_log(action="CHECKOUT", resource="purchase", status="REJECTED",
                      meta={"lines": len(request.items), "subtotal": subtotal})
            raise PurchaseRejectedError(result)

        # Backend total is the value of record; a mismatch is only worth noting
        if result.total_amount != subtotal:
            logger.info("Backend total %s differs from local subtotal %s", result.total_amount, subtotal)

        write_log(action="CHECKOUT", resource="purchase", status="SUCCESS",
                  meta={"lines": len(request.items), "subtotal": subtotal, "total_amount": result.total_amount})
        return result
