"""
Shared fixtures: a throwaway locale set, translation trees and manifests.
"""

import json

import pytest
from fastapi.testclient import TestClient

from services.web.config import Settings
from services.web.web_server import create_app

LOCALES_CONFIG = {
    "languageNames": {"en": "English", "fr": "Français", "de": "Deutsch"},
    "localeToFacebookLocale": {"en": "en_US", "fr": "fr_FR", "de": "de_DE"},
    "supportedFacebookLocales": ["en_US", "fr_FR", "de_DE"],
}

TRANSLATIONS = {
    "en": {
        "misc": {"maintitle": "Live CO2 emissions", "description": "Live map", "noscript": "Enable JavaScript"},
        "tooltips": {"ofinstalled": "%s of installed capacity", "crossborderexport": "Export from %s to %s"},
    },
    "fr": {
        "misc": {"maintitle": "Émissions de CO2 en direct", "description": ""},
        "tooltips": {"ofinstalled": "%s de la capacité installée"},
    },
    # no "de" file on purpose
}

MANIFESTS = {
    "en": {"assetsByChunkName": {
        "bundle": "bundle.abc123.js",
        "styles": "styles.sty111.css",
        "vendor": ["vendor.ven222.js", "vendor.ven333.css", "vendor.ven222.js.map"],
    }},
    "fr": {"assetsByChunkName": {
        "bundle": ["bundle.frb456.js", "bundle.frb456.js.map"],
        "styles": "styles.frs789.css",
        "vendor": ["vendor.frv000.js", "vendor.frv001.css"],
    }},
    # "de" has no manifest
}


@pytest.fixture
def site(tmp_path):
    """Directory tree the app loads at startup."""
    config_path = tmp_path / "locales-config.json"
    config_path.write_text(json.dumps(LOCALES_CONFIG), encoding="utf-8")

    locales_dir = tmp_path / "locales"
    locales_dir.mkdir()
    for code, tree in TRANSLATIONS.items():
        (locales_dir / f"{code}.json").write_text(json.dumps(tree), encoding="utf-8")

    static = tmp_path / "public"
    dist = static / "dist"
    dist.mkdir(parents=True)
    for code, manifest in MANIFESTS.items():
        (dist / f"manifest_{code}.json").write_text(json.dumps(manifest), encoding="utf-8")
    (dist / "bundle.abc123.js").write_text("console.log('bundle');", encoding="utf-8")
    (dist / "bundle.abc123.js.map").write_text("{}", encoding="utf-8")
    (static / "robots.txt").write_text("User-agent: *\n", encoding="utf-8")

    return {
        "LOCALES_CONFIG_PATH": str(config_path),
        "LOCALES_DIR": str(locales_dir),
        "STATIC_PATH": str(static),
    }


@pytest.fixture
def make_client(site):
    def _make(**env):
        settings = Settings({**site, **env})
        return TestClient(create_app(settings))
    return _make


@pytest.fixture
def client(make_client):
    return make_client()
