"""
Internationalization (i18n) Module

Provides multi-language support for the OrderDesk application.

Supported languages:
- Hebrew (he) - default, right-to-left
- English (en)

Usage in templates:
    {{ _('key.path.to.string') }}

Usage in Python:
    from modules.i18n import translate
    message = translate('key.path.to.string', lang='en')
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# Supported languages
SUPPORTED_LANGUAGES = {
    'he': {'name': 'עברית', 'dir': 'rtl'},
    'en': {'name': 'English', 'dir': 'ltr'},
}

DEFAULT_LANGUAGE = 'he'

# Known backend rejection phrases -> translation keys
BACKEND_MESSAGE_KEYS = (
    ('can have at most 2 decimal places', 'errors.backend.discount_decimals'),
    ('cannot exceed the total price', 'errors.backend.discount_exceeds_total'),
    ('must be greater than or equal to 0', 'errors.backend.discount_negative'),
    ('add at least one location', 'errors.backend.no_location'),
)

# Translation cache
_translations: Dict[str, Dict[str, Any]] = {}


class I18nManager:
    """Manages internationalization and translation loading."""

    def __init__(self, translations_dir: Optional[Path] = None):
        """
        Initialize i18n manager.

        Args:
            translations_dir: Path to translations directory.
                            Defaults to ./translations relative to this file.
        """
        if translations_dir is None:
            translations_dir = Path(__file__).parent.parent / 'translations'

        self.translations_dir = translations_dir
        self._load_all_translations()

    def _load_all_translations(self) -> None:
        """Load all translation files from translations directory."""
        if not self.translations_dir.exists():
            logger.warning(f"Translations directory not found: {self.translations_dir}")
            return

        for lang_code in SUPPORTED_LANGUAGES.keys():
            self._load_translation(lang_code)

    def _load_translation(self, lang_code: str) -> None:
        """
        Load translation file for a specific language.

        Args:
            lang_code: Language code (e.g., 'he', 'en')
        """
        translation_file = self.translations_dir / f'{lang_code}.json'

        if not translation_file.exists():
            logger.warning(
                f"Translation file not found: {translation_file}. "
                f"Using empty translations for {lang_code}."
            )
            _translations[lang_code] = {}
            return

        try:
            with open(translation_file, 'r', encoding='utf-8') as f:
                _translations[lang_code] = json.load(f)
            logger.info(
                f"Loaded {len(_translations[lang_code])} translation sections "
                f"for language: {lang_code}"
            )
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load translation file {translation_file}: {e}")
            _translations[lang_code] = {}

    def get_translation(
        self,
        key: str,
        lang: str = DEFAULT_LANGUAGE,
        **kwargs
    ) -> str:
        """
        Get translated string for a key.

        Supports nested keys using dot notation: 'section.subsection.key'
        Supports variable substitution: translate('hello', name='World')
            -> "Hello {name}!" becomes "Hello World!"

        Args:
            key: Translation key (supports dot notation)
            lang: Language code
            **kwargs: Variables for string formatting

        Returns:
            Translated string, or key if translation not found
        """
        if lang not in _translations:
            lang = DEFAULT_LANGUAGE

        value: Any = _translations.get(lang, {})
        for k in key.split('.'):
            if isinstance(value, dict):
                value = value.get(k)
            else:
                value = None
                break

        if not isinstance(value, str):
            logger.debug(f"Translation key not found: {key} (lang: {lang})")
            return key

        if kwargs:
            try:
                return value.format(**kwargs)
            except (KeyError, IndexError) as e:
                logger.warning(f"Missing variable in translation: {e} (key: {key}, lang: {lang})")
                return value
        return value

    def get_all_languages(self) -> Dict[str, Dict[str, str]]:
        return SUPPORTED_LANGUAGES

    def is_language_supported(self, lang_code: str) -> bool:
        return lang_code in SUPPORTED_LANGUAGES


# Global i18n manager instance
i18n_manager = I18nManager()


def translate(key: str, lang: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """
    Translate a key to the specified language.

    This is the main entry point for translations in Python code.

    Example:
        >>> translate('orders.title', lang='en')
        'Orders'
    """
    return i18n_manager.get_translation(key, lang, **kwargs)


def translate_backend_message(message: Optional[str], lang: str = DEFAULT_LANGUAGE) -> Optional[str]:
    """
    Translate a backend userMessage when it contains a known phrase.

    Unknown messages are returned verbatim; None stays None.
    """
    if not message:
        return message
    lowered = message.lower()
    for phrase, key in BACKEND_MESSAGE_KEYS:
        if phrase in lowered:
            return translate(key, lang=lang)
    return message


def get_supported_languages() -> Dict[str, Dict[str, str]]:
    return i18n_manager.get_all_languages()


def create_translation_filter(current_language: str):
    """
    Create a translation function for Flask templates.

    Usage in Flask:
        @app.context_processor
        def inject_translator():
            lang = session.get('language', DEFAULT_LANGUAGE)
            return {'_': create_translation_filter(lang)}
    """
    def translation_filter(key: str, **kwargs) -> str:
        return translate(key, lang=current_language, **kwargs)

    return translation_filter
