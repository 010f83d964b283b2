# pos_register/schemas/product.py
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional, Union


# Base configuration for building schemas from domain objects
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Product as resolved by the backend lookup endpoint
class Product(ORMBase):
    # Older backends send the id as "prd_id"; some do not send it at all
    product_id: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("product_id", "prd_id")
    )
    code: str
    name: str
    price: int = Field(ge=0)


# Request schema for resolving a scanned code
class LookupIn(BaseModel):
    code: str = Field(min_length=1)


# Request schema for operator edits of the staged fields
class StagedIn(BaseModel):
    code: str = ""
    name: str = ""
    price: Union[int, str, None] = None


# Response schema for the staging area
class StagedOut(ORMBase):
    found: bool = True
    product_id: Optional[int] = None
    code: str
    name: str
    price: Optional[int] = None
