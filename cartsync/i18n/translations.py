"""Localized messages for cart operation results."""

import json
from pathlib import Path
from typing import Any

from cartsync.logging import get_logger

logger = get_logger(__name__)

SUPPORTED_LANGUAGES = {
    "en": "English",
    "pt": "Português",
}

DEFAULT_LANGUAGE = "en"

LOCALES_PATH = Path(__file__).parent.parent / "locales"

# Loaded locale files, keyed by language code
_translations: dict[str, dict[str, Any]] = {}


def _load_translations(lang: str) -> dict[str, Any]:
    """Load and cache locales/<lang>.json."""
    if lang in _translations:
        return _translations[lang]

    file_path = LOCALES_PATH / f"{lang}.json"
    if not file_path.exists():
        logger.warning(f"Missing locale file: {file_path.name}")
        return {}

    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load locale {lang}: {e}")
        return {}

    if not isinstance(data, dict):
        return {}
    _translations[lang] = data
    return data


def _lookup(translations: dict[str, Any], key: str) -> Any:
    """Resolve a dot-notation key ("cart.add_failed")."""
    current: Any = translations
    for part in key.split("."):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


def detect_language(language_code: str | None) -> str:
    """
    Normalize a language tag to a supported language code.

    "pt-BR" -> "pt", unknown or empty -> DEFAULT_LANGUAGE
    """
    if not language_code:
        return DEFAULT_LANGUAGE
    lang = language_code.split("-")[0].lower()
    return lang if lang in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def get_text(key: str, lang: str = DEFAULT_LANGUAGE, default: str | None = None, **kwargs) -> str:
    """
    Get translated text by key.

    Args:
        key: Translation key (e.g., "cart.out_of_stock")
        lang: Language code (e.g., "en", "pt-BR")
        default: Returned instead of the key when no translation exists
        **kwargs: Variables to format into the string

    Returns:
        Translated string, falling back to English, then default/key
    """
    lang = detect_language(lang)

    text = _lookup(_load_translations(lang), key)
    if text is None and lang != DEFAULT_LANGUAGE:
        text = _lookup(_load_translations(DEFAULT_LANGUAGE), key)

    if not isinstance(text, str):
        return default if default is not None else key

    if kwargs:
        try:
            return text.format(**kwargs)
        except (KeyError, ValueError, IndexError):
            return text

    return text


def reload_translations() -> None:
    """Drop cached locale files."""
    _translations.clear()
