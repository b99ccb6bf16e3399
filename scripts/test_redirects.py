#!/usr/bin/env python3
"""
Tests for the canonical-host policy and alternate-language URLs
"""

from services.web.config import Settings
from services.web.redirects import alternate_url, alternate_urls, is_crawler, should_redirect_to_canonical

FB_UA = "facebookexternalhit/1.1 (+http://www.facebook.com/externalhit_uatext.php)"
BROWSER_UA = "Mozilla/5.0 (X11; Linux x86_64) Firefox/120.0"


def test_alternate_url_appends_to_existing_query():
    assert alternate_url("https://www.electricitymap.org/?foo=1", "de") == "https://www.electricitymap.org/?foo=1&lang=de"


def test_alternate_url_replaces_lang():
    assert alternate_url("https://www.electricitymap.org/?lang=en", "de") == "https://www.electricitymap.org/?lang=de"
    assert alternate_url("https://www.electricitymap.org/?a=1&lang=en&b=2", "fr") == "https://www.electricitymap.org/?a=1&lang=fr&b=2"


def test_alternate_url_without_query():
    assert alternate_url("https://www.electricitymap.org/", "de") == "https://www.electricitymap.org/?lang=de"
    assert alternate_url("https://www.electricitymap.org/?", "de") == "https://www.electricitymap.org/?lang=de"


def test_alternate_url_keeps_lookalike_keys():
    assert alternate_url("https://x/?language=en", "de") == "https://x/?language=en&lang=de"


def test_alternate_urls_one_per_locale():
    assert alternate_urls("https://x/", ["en", "fr"]) == ["https://x/?lang=en", "https://x/?lang=fr"]


def test_crawler_detection():
    assert is_crawler(FB_UA)
    assert not is_crawler(BROWSER_UA)
    assert not is_crawler(None)


def test_redirect_policy():
    s = Settings({})
    assert should_redirect_to_canonical("electricitymap.org", BROWSER_UA, s)
    assert should_redirect_to_canonical("live.electricitymap.org", BROWSER_UA, s)
    assert should_redirect_to_canonical("electricitymap.tmrow.co", None, s)

    assert not should_redirect_to_canonical("electricitymap.org", FB_UA, s)
    assert not should_redirect_to_canonical("electricitymap.tmrow.co", FB_UA, s)
    assert not should_redirect_to_canonical("www.electricitymap.org", BROWSER_UA, s)
    assert not should_redirect_to_canonical("staging.electricitymap.org", BROWSER_UA, s)
    assert not should_redirect_to_canonical("localhost:8000", BROWSER_UA, s)
    assert not should_redirect_to_canonical(None, BROWSER_UA, s)
