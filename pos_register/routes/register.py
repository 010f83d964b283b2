# pos_register/routes/register.py
from fastapi import APIRouter, Depends, HTTPException, Request, status

from pos_register.exceptions import (
    CheckoutInProgressError, ProductLookupError, PurchaseError, PurchaseRejectedError
)
from pos_register.models.cart import parse_price
from pos_register.schemas.cart import CartLineOut, CartOut
from pos_register.schemas.product import LookupIn, StagedIn, StagedOut
from pos_register.schemas.purchase import CheckoutOut
from pos_register.session import RegisterSession

router = APIRouter(prefix="/register", tags=["Register"])

async def get_session(request: Request) -> RegisterSession:
    # One register per app instance
    return request.app.state.register_session

def _cart_to_out(session: RegisterSession) -> CartOut:
    cart = session.cart
    lines = [
        CartLineOut(
            product_id=line.product_id,
            code=line.code,
            name=line.name,
            price=line.price,
            qty=line.qty,
            line_total=line.line_total,
        )
        for line in cart.lines()
    ]
    return CartOut(lines=lines, subtotal=cart.subtotal(), item_count=cart.item_count())

def _staged_to_out(session: RegisterSession, found: bool = True) -> StagedOut:
    staged = session.staged
    return StagedOut(
        found=found,
        product_id=staged.product_id,
        code=staged.code,
        name=staged.name,
        price=parse_price(staged.price),
    )

@router.post("/lookup", response_model=StagedOut)
async def lookup_product(payload: LookupIn, session: RegisterSession = Depends(get_session)):
    try:
        product = await session.lookup(payload.code)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ProductLookupError as e:
        raise HTTPException(status_code=502, detail=f"Product lookup failed ({e.status_code})")
    return _staged_to_out(session, found=product is not None)

@router.put("/staged", response_model=StagedOut)
async def edit_staged(payload: StagedIn, session: RegisterSession = Depends(get_session)):
    session.stage(payload.code, payload.name, payload.price)
    return _staged_to_out(session)

@router.delete("/staged", status_code=status.HTTP_204_NO_CONTENT)
async def discard_staged(session: RegisterSession = Depends(get_session)):
    session.discard_staged()

@router.post("/staged/commit", response_model=CartOut)
async def commit_staged(session: RegisterSession = Depends(get_session)):
    try:
        line = session.commit_staged()
    except CheckoutInProgressError:
        raise HTTPException(status_code=409, detail="Checkout in progress")
    if line is None:
        raise HTTPException(status_code=400, detail="Incomplete staged product")
    return _cart_to_out(session)

@router.get("/cart", response_model=CartOut)
async def get_cart(session: RegisterSession = Depends(get_session)):
    return _cart_to_out(session)

@router.post("/checkout", response_model=CheckoutOut)
async def checkout(session: RegisterSession = Depends(get_session)):
    subtotal = session.cart.subtotal()
    try:
        result = await session.checkout()
    except CheckoutInProgressError:
        raise HTTPException(status_code=409, detail="Checkout in progress")
    except PurchaseRejectedError:
        raise HTTPException(status_code=409, detail="Purchase rejected")
    except PurchaseError as e:
        raise HTTPException(status_code=502, detail=f"Purchase service unavailable ({e.status_code})")
    return CheckoutOut(success=result.success, total_amount=result.total_amount, subtotal=subtotal)
