"""
Internationalization helpers.

Messages are looked up in gettext catalogues under LOCALE_DIR
(<lang>/LC_MESSAGES/kindred.mo). Missing catalogues fall back to the
untranslated English text.
"""

import gettext
from contextvars import ContextVar
from functools import lru_cache
from typing import Optional

from kindred.core.config import settings

DOMAIN = "kindred"

RTL_LANGUAGES = frozenset({"ar", "dv", "fa", "he", "ps", "ug", "ur", "yi"})

_language_var: ContextVar[str] = ContextVar("language", default="")


@lru_cache(maxsize=None)
def _catalogue(language: str) -> gettext.NullTranslations:
    return gettext.translation(
        DOMAIN,
        localedir=str(settings.locale_path),
        languages=[language],
        fallback=True,
    )


def _primary_subtag(code: str) -> str:
    return code.strip().lower().replace("_", "-").split("-")[0]


class I18N:
    """Translation facade used by request handlers and reports"""

    @staticmethod
    def set_language(code: Optional[str]) -> str:
        """Select the language for the current request; unknown codes use the default"""
        language = _primary_subtag(code) if code else ""
        if language not in settings.AVAILABLE_LANGUAGES:
            language = settings.DEFAULT_LANGUAGE
        _language_var.set(language)
        return language

    @staticmethod
    def language() -> str:
        return _language_var.get() or settings.DEFAULT_LANGUAGE

    @staticmethod
    def negotiate(accept_language: Optional[str]) -> Optional[str]:
        """First available language from an Accept-Language header"""
        if not accept_language:
            return None
        weighted = []
        for position, part in enumerate(accept_language.split(",")):
            code, _, params = part.strip().partition(";")
            quality = 1.0
            if params.strip().startswith("q="):
                try:
                    quality = float(params.strip()[2:])
                except ValueError:
                    quality = 0.0
            weighted.append((-quality, position, _primary_subtag(code)))
        for _, _, code in sorted(weighted):
            if code in settings.AVAILABLE_LANGUAGES:
                return code
        return None

    @staticmethod
    def translate(message: str, *args) -> str:
        """Translate a message and substitute %s placeholders"""
        text = _catalogue(I18N.language()).gettext(message)
        return text % args if args else text

    @staticmethod
    def plural(singular: str, plural: str, count: int, *args) -> str:
        text = _catalogue(I18N.language()).ngettext(singular, plural, count)
        return text % args if args else text

    @staticmethod
    def direction() -> str:
        """Text direction of the current language: "ltr" or "rtl" """
        return "rtl" if I18N.language() in RTL_LANGUAGES else "ltr"
