from pydantic import BaseModel, Field
from typing import List, Optional


# Identifies who is ringing up the sale and on which register
class StationContext(BaseModel):
    employee_code: str
    store_code: str
    register_no: str


# One cart line flattened for the purchase endpoint
class PurchaseItem(BaseModel):
    product_id: Optional[int] = None
    code: str
    name: str
    price: int
    qty: int = Field(ge=1)


# Body sent to the purchase endpoint
class PurchaseRequest(StationContext):
    items: List[PurchaseItem]


# Backend answer; total_amount is the value of record
class PurchaseResult(BaseModel):
    success: bool
    total_amount: int


# Response schema for the register checkout command
class CheckoutOut(BaseModel):
    success: bool
    total_amount: int
    subtotal: int
