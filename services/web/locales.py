"""
Locale configuration, translation trees and per-request locale resolution.
Everything here is loaded once at startup and only read afterwards.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from fastapi import Request

from libs.em_common import get_logger, parse_accept_language, primary, split_facebook_locale

logger = get_logger("locales")


@dataclass(frozen=True)
class LocaleConfig:
    language_names: Mapping[str, str]
    locale_to_facebook_locale: Mapping[str, str] = field(default_factory=dict)
    supported_facebook_locales: tuple[str, ...] = ()

    @property
    def locales(self) -> list[str]:
        return list(self.language_names.keys())

    def facebook_locale(self, locale: str) -> Optional[str]:
        return self.locale_to_facebook_locale.get(locale)

    def match(self, code: str) -> Optional[str]:
        """Supported locale for a raw code, trying the exact code then its primary subtag."""
        if not code:
            return None
        if code in self.language_names:
            return code
        lowered = code.lower()
        for loc in self.language_names:
            if loc.lower() == lowered:
                return loc
        base = primary(code)
        return base if base in self.language_names else None


def load_locale_config(path: str) -> LocaleConfig:
    """Read the locale configuration (languageNames, localeToFacebookLocale, supportedFacebookLocales)."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return LocaleConfig(
        language_names=MappingProxyType(dict(data.get("languageNames", {}))),
        locale_to_facebook_locale=MappingProxyType(dict(data.get("localeToFacebookLocale", {}))),
        supported_facebook_locales=tuple(data.get("supportedFacebookLocales", [])),
    )


def load_translations(directory: str, locales: list[str]) -> dict[str, dict]:
    trees: dict[str, dict] = {}
    for code in locales:
        path = Path(directory) / f"{code}.json"
        try:
            with open(path, "r", encoding="utf-8") as f:
                trees[code] = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("couldn't load translations for locale %s: %s", code, e)
            trees[code] = {}
    logger.info("Loaded translations for %d locales", len(trees))
    return trees


class Translator:
    """Dotted-key lookup over the translation trees with default-locale fallback."""

    def __init__(self, trees: Mapping[str, Any], default_locale: str = "en"):
        self.trees = MappingProxyType(dict(trees))
        self.default_locale = default_locale

    def lookup(self, locale: str, key: str) -> Any:
        node: Any = self.trees.get(locale)
        for part in key.split("."):
            if not isinstance(node, Mapping):
                return None
            node = node.get(part)
        return node

    def translate(self, locale: str, key: str, *args) -> Any:
        result = self.lookup(locale, key)
        if not isinstance(result, str):
            result = None
        if locale != self.default_locale and not result:
            return self.translate(self.default_locale, key, *args)
        if not result or not args:
            return result
        try:
            return result % args
        except (TypeError, ValueError) as e:
            logger.warning("bad format arguments for %s/%s: %s", locale, key, e)
            return result

    def bind(self, locale: str) -> Callable[..., Any]:
        def translate_bound(key: str, *args):
            return self.translate(locale, key, *args)
        return translate_bound


def resolve_locale(request: Request, config: LocaleConfig, default_locale: str = "en") -> str:
    """
    Active locale for this request only:
    Accept-Language, then ?lang=, then ?fb_locale= (language_TERRITORY).
    """
    locale = default_locale

    for candidate in parse_accept_language(request.headers.get("accept-language", "")):
        matched = config.match(candidate)
        if matched:
            locale = matched
            break

    matched = config.match(request.query_params.get("lang", ""))
    if matched:
        locale = matched

    fb_locale = request.query_params.get("fb_locale")
    if fb_locale:
        matched = config.match(split_facebook_locale(fb_locale))
        if matched:
            locale = matched

    return locale
