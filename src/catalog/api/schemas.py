"""Pydantic request/response schemas for the Catalog API."""

from pydantic import BaseModel, ConfigDict, Field


class ProductResponse(BaseModel):
    id: int
    name: str
    price: float
    description: str | None = None
    image: str | None = None
    stock: int
    version: int


class SetStockRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [{"stock": 48, "expectedVersion": 3}]},
    )

    stock: int
    expected_version: int | None = Field(default=None, alias="expectedVersion")


class SetStockResponse(BaseModel):
    success: bool = True
    stock: int
    version: int
