"""Cart sync configuration read from the environment."""
import os


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# Remote stock/product API (json-server style: /products/{id}, /stock/{id}, /stock)
STOCK_API_URL = os.environ.get("STOCK_API_URL", "http://localhost:3333")
STOCK_API_TIMEOUT = _float_env("STOCK_API_TIMEOUT", 10.0)

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Single durable slot holding the serialized cart
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "@RocketShoes:cart")

# Language used for user-facing cart messages
CART_LANGUAGE = os.environ.get("CART_LANGUAGE", "en")
