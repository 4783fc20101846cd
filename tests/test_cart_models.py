"""
Tests for cart models
"""

import json

import pytest

from cartsync.cart.models import (
    CartResult,
    LineItem,
    MalformedCartError,
    find_item,
    parse_cart,
    serialize_cart,
)
from cartsync import config
from cartsync.errors import CartError, MSG_OUT_OF_STOCK


class TestLineItem:
    """Tests for LineItem dataclass."""

    def test_amount_must_be_positive(self):
        with pytest.raises(ValueError):
            LineItem(product_id=1, amount=0)

    def test_with_amount_returns_new_item(self):
        item = LineItem(product_id=1, amount=1, metadata={"title": "Shoe"})

        updated = item.with_amount(4)

        assert updated is not item
        assert updated.amount == 4
        assert item.amount == 1
        assert updated.metadata == {"title": "Shoe"}

    def test_to_dict_flattens_metadata(self):
        item = LineItem(product_id=2, amount=3, metadata={"title": "Shoe", "price": 99.9})

        assert item.to_dict() == {"title": "Shoe", "price": 99.9, "id": 2, "amount": 3}

    def test_from_dict_rejects_bool_amount(self):
        with pytest.raises(TypeError):
            LineItem.from_dict({"id": 1, "amount": True})


class TestCartFormat:
    """Tests for the cached cart format."""

    def test_serialize_is_json_array(self):
        cart = (
            LineItem(product_id=1, amount=2, metadata={"title": "A"}),
            LineItem(product_id=5, amount=1, metadata={"title": "B"}),
        )

        data = json.loads(serialize_cart(cart))

        assert [entry["id"] for entry in data] == [1, 5]
        assert data[0]["amount"] == 2

    def test_parse_cached_cart(self):
        raw = '[{"id": 1, "title": "Shoe", "price": 179.9, "image": "a.jpg", "amount": 2}]'

        cart = parse_cart(raw)

        assert cart == (
            LineItem(product_id=1, amount=2, metadata={"title": "Shoe", "price": 179.9, "image": "a.jpg"}),
        )

    @pytest.mark.parametrize("raw", [None, ""])
    def test_parse_absent(self, raw):
        assert parse_cart(raw) == ()

    def test_parse_malformed(self):
        with pytest.raises(MalformedCartError):
            parse_cart("[{")

    def test_find_item(self):
        cart = (LineItem(product_id=4, amount=1), LineItem(product_id=9, amount=1))

        assert find_item(cart, 9) == 1
        assert find_item(cart, 3) is None


class TestCartResult:
    """Tests for CartResult."""

    def test_success_is_truthy(self):
        result = CartResult.success()

        assert result
        assert result.message() is None

    def test_failure_message(self):
        result = CartResult.failure(CartError.INSUFFICIENT_STOCK, MSG_OUT_OF_STOCK)

        assert not result
        assert result.message("en") == "Requested quantity is out of stock"
        assert result.message("pt-BR") == "Quantidade solicitada fora de estoque"

    def test_failure_message_uses_configured_language(self, monkeypatch):
        monkeypatch.setattr(config, "CART_LANGUAGE", "pt")
        result = CartResult.failure(CartError.PRODUCT_NOT_FOUND, "cart.product_not_found")

        assert result.message() == "Produto não encontrado"
