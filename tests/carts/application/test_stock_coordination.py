"""Application tests for stock coordination between carts and the catalog.

The catalog is replaced by an in-memory fake that applies the same
compare-and-set rule as the product service.
"""

import asyncio

import pytest
from carts.cart import stock
from carts.cart.cart import Cart
from protean.exceptions import ValidationError
from shared.errors import CartConflict, InsufficientStock, NotFound, StockConflict, UpstreamUnavailable


class FakeCatalog:
    def __init__(self, products=None, conflicts=0):
        self.products = products or {1: {"id": 1, "price": 699.99, "stock": 50, "version": 0}}
        self.conflicts = conflicts
        self.unreachable = set()
        self.writes = []

    async def get_product(self, product_id):
        # Yield like a real HTTP call so concurrent flows interleave
        await asyncio.sleep(0)
        if product_id not in self.products:
            raise NotFound("Product not found")
        return dict(self.products[product_id])

    async def set_stock(self, product_id, new_stock, expected_version=None):
        if product_id in self.unreachable:
            raise UpstreamUnavailable("product-service unreachable")
        product = self.products[product_id]
        if self.conflicts:
            # Someone else wrote in between our read and our write
            self.conflicts -= 1
            product["version"] += 1
            raise StockConflict("version moved")
        if expected_version is not None and expected_version != product["version"]:
            raise StockConflict("version moved")

        product["stock"] = new_stock
        product["version"] += 1
        self.writes.append((product_id, new_stock))
        return {"success": True, "stock": new_stock, "version": product["version"]}


def run(coro):
    return asyncio.run(coro)


class TestAdjustStock:
    def test_applies_delta(self):
        catalog = FakeCatalog()
        assert run(stock.adjust_stock(catalog, 1, -2)) == 48
        assert catalog.products[1]["stock"] == 48

    def test_refuses_to_go_negative(self):
        catalog = FakeCatalog()
        with pytest.raises(InsufficientStock):
            run(stock.adjust_stock(catalog, 1, -51))
        assert catalog.writes == []

    def test_retries_on_conflict(self):
        catalog = FakeCatalog(conflicts=2)
        assert run(stock.adjust_stock(catalog, 1, -1, attempts=3)) == 49

    def test_gives_up_after_bounded_attempts(self):
        catalog = FakeCatalog(conflicts=5)
        with pytest.raises(StockConflict):
            run(stock.adjust_stock(catalog, 1, -1, attempts=3))
        assert catalog.products[1]["stock"] == 50

    def test_unknown_product(self):
        with pytest.raises(NotFound):
            run(stock.adjust_stock(FakeCatalog(), 999, -1))


class TestAddItemFlow:
    def test_reserves_stock_and_writes_cart(self):
        catalog = FakeCatalog()
        lines = run(stock.add_item(catalog, "u1", 1, 2))
        assert lines == [{"productId": 1, "quantity": 2}]
        assert catalog.products[1]["stock"] == 48

    def test_insufficient_stock_leaves_cart_and_stock_unchanged(self):
        catalog = FakeCatalog()
        with pytest.raises(InsufficientStock):
            run(stock.add_item(catalog, "u1", 1, 60))
        assert catalog.products[1]["stock"] == 50
        assert stock.current_cart("u1") is None

    def test_releases_reservation_when_cart_write_fails(self, monkeypatch):
        catalog = FakeCatalog()

        def failing_add(self, product_id, quantity):
            raise RuntimeError("cart store unavailable")

        monkeypatch.setattr(Cart, "add_item", failing_add)

        with pytest.raises(RuntimeError):
            run(stock.add_item(catalog, "u1", 1, 2))
        assert catalog.products[1]["stock"] == 50


class TestUpdateQuantityFlow:
    def test_increase_reserves_difference(self):
        catalog = FakeCatalog()
        run(stock.add_item(catalog, "u1", 1, 2))
        run(stock.update_item_quantity(catalog, "u1", 1, 5))
        assert catalog.products[1]["stock"] == 45
        assert stock.current_cart("u1").quantity_of(1) == 5

    def test_decrease_releases_difference(self):
        catalog = FakeCatalog()
        run(stock.add_item(catalog, "u1", 1, 5))
        run(stock.update_item_quantity(catalog, "u1", 1, 1))
        assert catalog.products[1]["stock"] == 49

    def test_zero_removes_line_and_restores_all_units(self):
        catalog = FakeCatalog()
        run(stock.add_item(catalog, "u1", 1, 3))
        lines = run(stock.update_item_quantity(catalog, "u1", 1, 0))
        assert lines == []
        assert catalog.products[1]["stock"] == 50

    def test_increase_beyond_stock_changes_nothing(self):
        catalog = FakeCatalog()
        run(stock.add_item(catalog, "u1", 1, 2))
        with pytest.raises(InsufficientStock):
            run(stock.update_item_quantity(catalog, "u1", 1, 100))
        assert catalog.products[1]["stock"] == 48
        assert stock.current_cart("u1").quantity_of(1) == 2

    def test_item_not_in_cart(self):
        with pytest.raises(NotFound):
            run(stock.update_item_quantity(FakeCatalog(), "u1", 1, 2))


class TestRemoveAndClearFlows:
    def test_remove_restores_stock(self):
        catalog = FakeCatalog()
        run(stock.add_item(catalog, "u1", 1, 4))
        run(stock.remove_item(catalog, "u1", 1))
        assert catalog.products[1]["stock"] == 50
        assert stock.current_cart("u1").lines() == []

    def test_remove_unknown_item(self):
        with pytest.raises(NotFound):
            run(stock.remove_item(FakeCatalog(), "u1", 1))

    def test_clear_with_restock_restores_every_line(self):
        catalog = FakeCatalog(
            {
                1: {"id": 1, "price": 699.99, "stock": 50, "version": 0},
                2: {"id": 2, "price": 1299.99, "stock": 30, "version": 0},
            }
        )
        run(stock.add_item(catalog, "u1", 1, 2))
        run(stock.add_item(catalog, "u1", 2, 3))

        assert run(stock.clear_with_restock(catalog, "u1")) == []
        assert catalog.products[1]["stock"] == 50
        assert catalog.products[2]["stock"] == 30

    def test_clear_with_restock_on_missing_cart(self):
        catalog = FakeCatalog()
        assert run(stock.clear_with_restock(catalog, "nobody")) == []
        assert catalog.writes == []

    def test_remove_keeps_line_when_catalog_is_unreachable(self):
        catalog = FakeCatalog()
        run(stock.add_item(catalog, "u1", 1, 4))
        catalog.unreachable.add(1)

        with pytest.raises(UpstreamUnavailable):
            run(stock.remove_item(catalog, "u1", 1))
        assert stock.current_cart("u1").lines() == [{"productId": 1, "quantity": 4}]
        assert catalog.products[1]["stock"] == 46

    def test_remove_takes_units_back_when_cart_write_fails(self, monkeypatch):
        catalog = FakeCatalog()
        run(stock.add_item(catalog, "u1", 1, 4))

        def failing_remove(self, product_id, expected_quantity=None):
            raise RuntimeError("cart store unavailable")

        monkeypatch.setattr(Cart, "remove_item", failing_remove)

        with pytest.raises(RuntimeError):
            run(stock.remove_item(catalog, "u1", 1))
        assert catalog.products[1]["stock"] == 46
        assert stock.current_cart("u1").quantity_of(1) == 4

    def test_clear_with_restock_keeps_unreleased_lines(self):
        catalog = FakeCatalog(
            {
                1: {"id": 1, "price": 699.99, "stock": 50, "version": 0},
                2: {"id": 2, "price": 1299.99, "stock": 30, "version": 0},
            }
        )
        run(stock.add_item(catalog, "u1", 1, 5))
        run(stock.add_item(catalog, "u1", 2, 3))
        catalog.unreachable.add(2)

        with pytest.raises(UpstreamUnavailable):
            run(stock.clear_with_restock(catalog, "u1"))

        assert catalog.products[1]["stock"] == 50
        assert catalog.products[2]["stock"] == 27
        assert stock.current_cart("u1").lines() == [{"productId": 2, "quantity": 3}]

    def test_clear_with_restock_leaves_cart_alone_when_catalog_is_down(self):
        catalog = FakeCatalog()
        run(stock.add_item(catalog, "u1", 1, 5))
        catalog.unreachable.add(1)

        with pytest.raises(UpstreamUnavailable):
            run(stock.clear_with_restock(catalog, "u1"))
        assert stock.current_cart("u1").lines() == [{"productId": 1, "quantity": 5}]
        assert catalog.products[1]["stock"] == 45


async def _together(*coros):
    return await asyncio.gather(*coros, return_exceptions=True)


class TestConcurrentSubmissions:
    def test_double_quantity_update_reserves_once(self):
        catalog = FakeCatalog()
        run(stock.add_item(catalog, "u1", 1, 2))

        results = run(
            _together(
                stock.update_item_quantity(catalog, "u1", 1, 5),
                stock.update_item_quantity(catalog, "u1", 1, 5),
            )
        )

        assert results == [[{"productId": 1, "quantity": 5}], [{"productId": 1, "quantity": 5}]]
        assert stock.current_cart("u1").quantity_of(1) == 5
        assert catalog.products[1]["stock"] == 45

    def test_racing_updates_keep_cart_and_stock_in_step(self):
        catalog = FakeCatalog()
        run(stock.add_item(catalog, "u1", 1, 2))

        run(
            _together(
                stock.update_item_quantity(catalog, "u1", 1, 6),
                stock.update_item_quantity(catalog, "u1", 1, 3),
            )
        )

        quantity = stock.current_cart("u1").quantity_of(1)
        assert catalog.products[1]["stock"] == 50 - quantity

    def test_double_remove_restores_stock_once(self):
        catalog = FakeCatalog()
        run(stock.add_item(catalog, "u1", 1, 4))

        results = run(_together(stock.remove_item(catalog, "u1", 1), stock.remove_item(catalog, "u1", 1)))

        assert results[0] == []
        assert isinstance(results[1], ValidationError)
        assert catalog.products[1]["stock"] == 50
        assert stock.current_cart("u1").lines() == []

    def test_update_gives_up_when_line_keeps_changing(self, monkeypatch):
        catalog = FakeCatalog()
        run(stock.add_item(catalog, "u1", 1, 2))

        def always_stale(self, product_id, new_quantity, expected_quantity=None):
            raise CartConflict("line moved")

        monkeypatch.setattr(Cart, "set_item_quantity", always_stale)

        with pytest.raises(CartConflict):
            run(stock.update_item_quantity(catalog, "u1", 1, 5, attempts=2))
        assert catalog.products[1]["stock"] == 48
