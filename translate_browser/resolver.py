from __future__ import annotations

from typing import Optional

from .cache import TranslationCache
from .config import SOURCE_LANG, TARGET_LANG
from .debug import get_logger
from .dictionary import StaticDictionary
from .remote import OfflineTranslator, RemoteTranslator, fetch_translation
from .utils import is_translatable_stem, split_extension


class NameResolver:
    """Produce a translation for a file name; never raises.

    Lookup order, first hit wins: cache, exact dictionary match,
    case-insensitive dictionary match, the untranslatable shortcut, then the
    remote service on the stem with the extension put back. Every answer,
    including the fall back to the original name, is memoized.
    """

    def __init__(
        self,
        cache: TranslationCache,
        dictionary: Optional[StaticDictionary] = None,
        translator: Optional[RemoteTranslator] = None,
        source_lang: str = SOURCE_LANG,
        target_lang: str = TARGET_LANG,
    ) -> None:
        self.cache = cache
        self.dictionary = dictionary if dictionary is not None else StaticDictionary()
        self.translator: RemoteTranslator = translator if translator is not None else OfflineTranslator()
        self.source_lang = source_lang
        self.target_lang = target_lang
        self.logr = get_logger("resolver")

    def resolve(self, name: str) -> str:
        cached = self.cache.get(name)
        if cached is not None:
            return cached

        hit = self.dictionary.exact(name)
        if hit is None:
            hit = self.dictionary.insensitive(name)
        if hit is not None:
            self.cache.set(name, hit)
            return hit

        stem, ext = split_extension(name)
        if not is_translatable_stem(stem):
            self.cache.set(name, name)
            return name

        outcome = fetch_translation(self.translator, stem, self.source_lang, self.target_lang)
        if not outcome.ok:
            self.logr.debug("fallback to original for %r: %s", name, outcome.error)
            self.cache.set(name, name)
            return name

        translated = f"{outcome.text}{ext}"
        self.cache.set(name, translated)
        return translated
