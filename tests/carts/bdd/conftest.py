"""Shared BDD fixtures and step definitions for the Carts domain."""

import pytest
from carts.cart.cart import Cart
from carts.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
    CartReplaced,
)
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_CART_EVENT_CLASSES = {
    "CartItemAdded": CartItemAdded,
    "CartItemQuantityChanged": CartItemQuantityChanged,
    "CartItemRemoved": CartItemRemoved,
    "CartReplaced": CartReplaced,
    "CartCleared": CartCleared,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('an empty cart for user "{user_id}"'), target_fixture="cart")
def empty_cart(user_id):
    return Cart.create(user_id)


@given(
    parsers.cfparse('a cart for user "{user_id}" holding {quantity:d} units of product {product_id:d}'),
    target_fixture="cart",
)
def cart_with_line(user_id, quantity, product_id):
    cart = Cart.create(user_id)
    cart.add_item(product_id=product_id, quantity=quantity)
    cart._events.clear()
    return cart


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("the cart has {count:d} line"))
@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(cart, count):
    assert len(cart.lines()) == count


@then(parsers.cfparse("product {product_id:d} has quantity {quantity:d} in the cart"))
def product_quantity_in_cart(cart, product_id, quantity):
    assert cart.quantity_of(product_id) == quantity


@then(parsers.cfparse("a {event_type} cart event is raised"))
def cart_event_raised(cart, event_type):
    event_cls = _CART_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in cart._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in cart._events]}"
