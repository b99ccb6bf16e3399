"""
Redirect policy: canonical host, legacy API paths, alternate-language URLs.
"""

from fastapi import Request

from services.web.config import Settings

CRAWLER_MARKER = "facebookexternalhit"


def original_url(request: Request) -> str:
    """Path and query exactly as requested, e.g. /v1/foo?bar=1"""
    raw = request.scope.get("raw_path")
    path = raw.split(b"?", 1)[0].decode("latin-1") if raw else request.url.path
    query = request.url.query
    return f"{path}?{query}" if query else path


def is_crawler(user_agent: str | None) -> bool:
    return CRAWLER_MARKER in (user_agent or "")


def should_redirect_to_canonical(host: str | None, user_agent: str | None, settings: Settings) -> bool:
    """
    Everyone on the non-www and legacy tmrow hosts goes to the canonical
    domain, except staging and the Facebook crawler.
    """
    host = host or ""
    if host == settings.STAGING_HOST:
        return False
    is_non_www = host in settings.NON_WWW_HOSTS
    is_legacy = settings.LEGACY_HOST_MARKER in host
    return (is_non_www or is_legacy) and not is_crawler(user_agent)


def canonical_url(request: Request, settings: Settings) -> str:
    return f"https://{settings.CANONICAL_HOST}{original_url(request)}"


def api_url(request: Request, settings: Settings) -> str:
    return f"https://{settings.API_HOST}{original_url(request)}"


def alternate_url(full_url: str, locale: str) -> str:
    """
    https://x/?foo=1  → https://x/?foo=1&lang=de
    https://x/?lang=en → https://x/?lang=de
    https://x/         → https://x/?lang=de
    """
    base, _, query = full_url.partition("?")
    pairs = [p for p in query.split("&") if p]
    replaced = False
    for i, pair in enumerate(pairs):
        if pair.split("=", 1)[0] == "lang":
            pairs[i] = f"lang={locale}"
            replaced = True
    if not replaced:
        pairs.append(f"lang={locale}")
    return f"{base}?{'&'.join(pairs)}"


def alternate_urls(full_url: str, locales: list[str]) -> list[str]:
    return [alternate_url(full_url, loc) for loc in locales]
