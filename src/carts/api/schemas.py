"""Pydantic request/response schemas for the Cart API."""

from pydantic import BaseModel, ConfigDict, Field


class CartLine(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(alias="productId")
    quantity: int


class AddItemRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [{"productId": 1, "quantity": 2}]},
    )

    product_id: int = Field(alias="productId")
    quantity: int = Field(default=1, ge=1)


class ReplaceCartRequest(BaseModel):
    items: list[CartLine]


class UpdateQuantityRequest(BaseModel):
    quantity: int


class CartResponse(BaseModel):
    success: bool = True
    cart: list[dict]
