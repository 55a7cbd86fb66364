"""FastAPI routes for the Catalog service."""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from catalog.api.schemas import ProductResponse, SetStockRequest, SetStockResponse
from catalog.product.product import Product
from catalog.product.stock import SetStock
from shared.errors import NotFound
from shared.metrics import ServiceMetrics, get_metrics

product_router = APIRouter(prefix="/api/products", tags=["products"])


def _load_product(product_id: int) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFound("Product not found") from None


@product_router.get("", response_model=list[ProductResponse])
async def list_products(metrics: ServiceMetrics = Depends(get_metrics)) -> list[ProductResponse]:
    products = current_domain.repository_for(Product)._dao.query.all().items
    metrics.increment("views")
    return [ProductResponse(**product.to_wire()) for product in sorted(products, key=lambda p: p.id)]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, metrics: ServiceMetrics = Depends(get_metrics)) -> ProductResponse:
    product = _load_product(product_id)
    metrics.increment("views")
    return ProductResponse(**product.to_wire())


@product_router.put("/{product_id}/stock", response_model=SetStockResponse)
async def set_stock(product_id: int, body: SetStockRequest) -> SetStockResponse:
    command = SetStock(
        product_id=product_id,
        stock=body.stock,
        expected_version=body.expected_version,
    )
    version = current_domain.process(command, asynchronous=False)
    return SetStockResponse(stock=body.stock, version=version)
