"""Shared BDD fixtures and step definitions for the Orders domain."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def catalog_prices():
    return {}


@given(parsers.cfparse('product {product_id:d} "{name}" priced at {price:f}'))
def product_priced_at(catalog_prices, product_id, name, price):
    catalog_prices[product_id] = {"id": product_id, "name": name, "price": price}


@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("the order total is {total:f}"))
def order_total_is(order, total):
    assert order.total == pytest.approx(total)


@then(parsers.cfparse("line {index:d} has an item total of {total:f}"))
def line_item_total(order, index, total):
    assert order.items[index - 1]["item_total"] == pytest.approx(total)


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status
