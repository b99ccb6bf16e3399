"""
Shared language code helpers for electricityMap services.
"""

from typing import List


def primary(lang: str) -> str:
    """
    Extract primary language subtag.

    Examples:
        en-US → en
        fr_FR → fr
        zh-CN → zh
    """
    code = (lang or "").strip().replace("_", "-")
    return code.split("-")[0].lower() if code else ""


def split_facebook_locale(fb_locale: str) -> str:
    """
    Facebook locales look like ``fr_FR`` (language_TERRITORY).
    Returns the part before the first underscore.
    """
    return (fb_locale or "").split("_", 1)[0]


def parse_accept_language(header: str) -> List[str]:
    """
    Parse an Accept-Language header into codes ordered by preference.

    Examples:
        "fr-CH, fr;q=0.9, en;q=0.8" → ["fr-CH", "fr", "en"]
        "*" → []
    """
    weighted = []
    for position, part in enumerate((header or "").split(",")):
        piece = part.strip()
        if not piece:
            continue
        code, _, params = piece.partition(";")
        code = code.strip()
        if not code or code == "*":
            continue
        q = 1.0
        for param in params.split(";"):
            name, _, value = param.partition("=")
            if name.strip().lower() != "q":
                continue
            try:
                q = float(value)
            except ValueError:
                q = 0.0
        if q <= 0:
            continue
        weighted.append((-q, position, code))
    return [code for _, _, code in sorted(weighted)]
