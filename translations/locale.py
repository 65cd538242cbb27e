# translations/locale.py
from __future__ import annotations

from typing import Optional, Protocol

from django.conf import settings
from django.utils import translation


class LocaleProvider(Protocol):
    def current(self) -> str:
        ...

    def fallback(self) -> str:
        ...


class DjangoLocaleProvider:
    """
    Locale of the running request/thread (LocaleMiddleware, translation.override)
    with TRANSLATIONS_FALLBACK_LOCALE, or LANGUAGE_CODE, as the fallback.
    """

    def current(self) -> str:
        return translation.get_language() or settings.LANGUAGE_CODE

    def fallback(self) -> str:
        return getattr(settings, "TRANSLATIONS_FALLBACK_LOCALE", None) or settings.LANGUAGE_CODE


class StaticLocaleProvider:
    """Fixed locales, for scripts and management commands."""

    def __init__(self, current: str, fallback: Optional[str] = None) -> None:
        self._current = current
        self._fallback = fallback or current

    def current(self) -> str:
        return self._current

    def fallback(self) -> str:
        return self._fallback
