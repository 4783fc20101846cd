"""
Cart Error Taxonomy

Failure conditions reported by cart operations, plus the infrastructure
exceptions raised by the storage and configuration layers.
"""
from enum import Enum


class CartError(str, Enum):
    """Recoverable failure conditions of a cart operation."""
    PRODUCT_NOT_FOUND = "product_not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    PRODUCT_NOT_IN_CART = "product_not_in_cart"
    INVALID_AMOUNT = "invalid_amount"
    TRANSIENT_FAILURE = "transient_failure"


class ConfigurationError(ValueError):
    """Raised when a required setting is missing from the environment."""


class CartStorageError(Exception):
    """Raised when the durable cart slot cannot be read or written."""


# Message keys (resolved through cartsync.i18n)
MSG_ADD_FAILED = "cart.add_failed"
MSG_REMOVE_FAILED = "cart.remove_failed"
MSG_UPDATE_FAILED = "cart.update_failed"
MSG_OUT_OF_STOCK = "cart.out_of_stock"
MSG_PRODUCT_NOT_FOUND = "cart.product_not_found"
MSG_CLEAR_FAILED = "cart.clear_failed"
