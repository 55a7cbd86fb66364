"""Stock updates — command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Integer
from protean.utils.globals import current_domain

from catalog.domain import catalog
from catalog.product.product import Product
from shared.errors import NotFound


@catalog.command(part_of="Product")
class SetStock:
    product_id = Integer(required=True)
    stock = Integer(required=True)
    expected_version = Integer()  # Optional: makes the write conditional


@catalog.command_handler(part_of=Product)
class StockHandler:
    @handle(SetStock)
    def set_stock(self, command):
        repo = current_domain.repository_for(Product)
        try:
            product = repo.get(command.product_id)
        except ObjectNotFoundError:
            raise NotFound("Product not found") from None

        product.set_stock(command.stock, expected_version=command.expected_version)
        repo.add(product)
        return product.version
