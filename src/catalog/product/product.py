"""Product aggregate — a purchasable item and its stock level.

Stock writes replace the whole stored record (the repository persists full
aggregates). Every write bumps ``version`` so callers can make the write
conditional on the value they read.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Integer, String, Text

from catalog.domain import catalog
from catalog.product.events import ProductStockChanged
from shared.config import get_settings
from shared.errors import StockConflict


@catalog.aggregate(schema_name=get_settings().products_table, limit=None)
class Product:
    id = Integer(identifier=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    description = Text()
    image = String(max_length=255)
    stock = Integer(default=0)
    version = Integer(default=0)
    updated_at = DateTime()

    @classmethod
    def create(cls, id, name, price, description=None, image=None, stock=0):
        return cls(
            id=id,
            name=name,
            price=price,
            description=description,
            image=image,
            stock=stock,
            version=0,
            updated_at=datetime.now(UTC),
        )

    def set_stock(self, new_stock, expected_version=None):
        """Overwrite the stock level.

        Without ``expected_version`` the write is unconditional (last writer wins).
        """
        if expected_version is not None and expected_version != self.version:
            raise StockConflict(
                f"Product {self.id} is at version {self.version}, expected {expected_version}"
            )

        previous_stock = self.stock
        self.stock = new_stock
        self.version += 1
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductStockChanged(
                product_id=self.id,
                previous_stock=previous_stock,
                new_stock=new_stock,
                product_version=self.version,
            )
        )

    def to_wire(self):
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "description": self.description,
            "image": self.image,
            "stock": self.stock,
            "version": self.version,
        }
