"""
Unit tests for translations.
"""

import json
from pathlib import Path

from modules.i18n import (
    create_translation_filter,
    get_supported_languages,
    translate,
    translate_backend_message,
)


TRANSLATIONS_DIR = Path(__file__).parent.parent / "translations"


def _flatten(data, prefix=""):
    keys = set()
    for key, value in data.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict):
            keys |= _flatten(value, path + ".")
        else:
            keys.add(path)
    return keys


class TestTranslate:

    def test_english(self):
        assert translate("orders.title", lang="en") == "Orders"

    def test_missing_key_returns_key(self):
        assert translate("orders.no_such_key", lang="en") == "orders.no_such_key"

    def test_section_key_returns_key(self):
        """A key naming a section (not a string) is treated as missing."""
        assert translate("orders", lang="en") == "orders"

    def test_substitution(self):
        assert translate("pagination.page_of", lang="en", page=2, total=5) == "Page 2 of 5"

    def test_unknown_language_falls_back_to_hebrew(self):
        assert translate("orders.title", lang="fr") == translate("orders.title", lang="he")

    def test_translation_filter(self):
        _ = create_translation_filter("en")
        assert _("auth.invalid_credentials") == "Invalid credentials"

    def test_supported_languages(self):
        languages = get_supported_languages()
        assert languages["he"]["dir"] == "rtl"
        assert languages["en"]["dir"] == "ltr"


class TestBackendMessages:

    def test_known_phrase(self):
        message = "Discount cannot exceed the total price of the order"
        assert translate_backend_message(message, lang="en") == "The discount cannot exceed the order total"

    def test_match_is_case_insensitive(self):
        message = "Discount CAN HAVE AT MOST 2 DECIMAL PLACES"
        assert translate_backend_message(message, lang="en") == "The discount can have at most 2 decimal places"

    def test_unknown_message_is_verbatim(self):
        assert translate_backend_message("Customer is blocked", lang="en") == "Customer is blocked"

    def test_none(self):
        assert translate_backend_message(None) is None


class TestTranslationFiles:

    def test_same_keys_in_every_language(self):
        he = json.loads((TRANSLATIONS_DIR / "he.json").read_text(encoding="utf-8"))
        en = json.loads((TRANSLATIONS_DIR / "en.json").read_text(encoding="utf-8"))
        assert _flatten(he) == _flatten(en)
