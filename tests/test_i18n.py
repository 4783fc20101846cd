"""Tests for i18n translations"""
from cartsync.i18n import SUPPORTED_LANGUAGES, detect_language, get_text


def test_get_text_existing_key():
    assert get_text("cart.add_failed", "en") == "Could not add the product"


def test_get_text_portuguese():
    assert get_text("cart.add_failed", "pt") == "Erro na adição do produto"


def test_unknown_language_falls_back_to_english():
    assert get_text("cart.product_not_found", "de") == "Product not found"


def test_unknown_key_returns_key_or_default():
    assert get_text("cart.nope", "pt") == "cart.nope"
    assert get_text("cart.nope", "pt", default="x") == "x"


def test_partial_key_is_not_text():
    assert get_text("cart", "en") == "cart"


def test_all_languages_cover_cart_messages():
    keys = ["add_failed", "remove_failed", "update_failed", "clear_failed", "out_of_stock", "product_not_found"]
    for lang in SUPPORTED_LANGUAGES:
        for key in keys:
            assert get_text(f"cart.{key}", lang) != f"cart.{key}"


def test_detect_language():
    assert detect_language("pt-BR") == "pt"
    assert detect_language("EN") == "en"
    assert detect_language("fr") == "en"
    assert detect_language(None) == "en"
