from decimal import Decimal

import pytest

from eburger.store.cart import CartEngine


@pytest.fixture
def cart():
    return CartEngine()


def test_starts_empty(cart):
    assert cart.is_empty()
    assert cart.lines() == []
    assert cart.total() == Decimal("0")
    assert cart.count() == 0


@pytest.mark.parametrize("times", [1, 2, 5])
def test_repeated_add_merges_into_one_line(cart, burger, times):
    """N adds of the same product give one line with quantity N."""
    for _ in range(times):
        cart.add_item(burger)
    lines = cart.lines()
    assert len(lines) == 1
    assert lines[0].id == "1"
    assert lines[0].quantity == times


def test_lines_keep_first_add_order(cart, burger, chicken):
    cart.add_item(chicken)
    cart.add_item(burger)
    cart.add_item(chicken)
    assert [line.id for line in cart.lines()] == ["2", "1"]


def test_add_keeps_original_copy(cart, burger):
    """A price edit after the first add does not refresh the existing line."""
    cart.add_item(burger)
    cart.add_item(burger.model_copy(update={"price": Decimal("99.00"), "name": "Renamed"}))
    [line] = cart.lines()
    assert line.quantity == 2
    assert line.price == Decimal("12.50")
    assert line.name == "Classic Cheeseburger"


def test_update_quantity_up_and_down(cart, burger):
    cart.add_item(burger)
    cart.update_quantity("1", 3)
    assert cart.lines()[0].quantity == 4
    cart.update_quantity("1", -2)
    assert cart.lines()[0].quantity == 2


@pytest.mark.parametrize("delta", [-1, -2, -50])
def test_update_quantity_to_zero_or_below_removes_line(cart, burger, chicken, delta):
    """Quantity never goes negative; reaching zero drops the line."""
    cart.add_item(burger)
    cart.add_item(chicken)
    assert cart.update_quantity("1", delta) is None
    assert [line.id for line in cart.lines()] == ["2"]
    assert all(line.quantity > 0 for line in cart.lines())


def test_update_or_remove_missing_is_noop(cart, burger):
    cart.add_item(burger)
    assert cart.update_quantity("missing", 1) is None
    cart.remove_item("missing")
    cart.update_quantity("1", -1)
    cart.update_quantity("1", -1)
    cart.remove_item("1")
    assert cart.is_empty()


def test_remove_item(cart, burger, chicken):
    cart.add_item(burger)
    cart.add_item(burger)
    cart.add_item(chicken)
    cart.remove_item("1")
    assert [line.id for line in cart.lines()] == ["2"]


def test_total_and_count_track_every_mutation(cart, burger, chicken):
    """total() is always the sum of price x quantity over current lines."""
    cart.add_item(burger)
    cart.add_item(burger)
    cart.add_item(chicken)
    assert cart.total() == Decimal("39.00")
    assert cart.count() == 3

    cart.update_quantity("2", 2)
    assert cart.total() == Decimal("67.00")
    assert cart.count() == 5

    cart.remove_item("1")
    assert cart.total() == Decimal("42.00")
    assert cart.total() == sum(line.price * line.quantity for line in cart.lines())


def test_clear(cart, burger):
    cart.add_item(burger)
    cart.clear()
    assert cart.is_empty()


def test_lines_are_snapshots(cart, burger):
    cart.add_item(burger)
    snapshot = cart.lines()
    cart.add_item(burger)
    assert snapshot[0].quantity == 1
