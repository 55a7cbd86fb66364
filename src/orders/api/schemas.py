"""Pydantic request/response schemas for the Order API."""

from pydantic import BaseModel, ConfigDict, Field


class CustomerDetails(BaseModel):
    name: str
    email: str
    address: str


class CreateOrderRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "userId": "0b6c1a52-3f43-4d7e-9a55-2f1f3e0f2c11",
                    "customer": {"name": "Ada Lovelace", "email": "ada@example.com", "address": "12 Analytical St"},
                }
            ]
        },
    )

    user_id: str = Field(alias="userId")
    customer: CustomerDetails


class OrderProduct(BaseModel):
    id: int
    name: str
    price: float


class OrderLine(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product: OrderProduct
    quantity: int
    item_total: float = Field(alias="itemTotal")


class OrderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(alias="userId")
    date: str
    customer: CustomerDetails
    items: list[OrderLine]
    total: float
    status: str
