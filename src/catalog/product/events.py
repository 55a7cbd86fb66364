"""Domain events for the Product aggregate."""

from protean.fields import Integer

from catalog.domain import catalog


@catalog.event(part_of="Product")
class ProductStockChanged:
    """The stock level of a product was overwritten."""

    __version__ = 1

    product_id = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    product_version = Integer(required=True)
