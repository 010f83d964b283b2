from typing import List, Optional
from pydantic import BaseModel
from pos_register.schemas.product import ORMBase

# Response schema for a single cart line
class CartLineOut(ORMBase):
    product_id: Optional[int] = None
    code: str
    name: str
    price: int
    qty: int
    line_total: int

# Response schema for the entire cart summary
class CartOut(BaseModel):
    lines: List[CartLineOut]
    subtotal: int
    item_count: int
