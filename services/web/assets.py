"""
Long-term caching: content hashes of the built bundles, per locale.

The client build writes one manifest per locale to
<STATIC_PATH>/dist/manifest_<locale>.json:

    {"assetsByChunkName": {"bundle": "bundle.abc123.js",
                           "vendor": ["vendor.def456.js", "vendor.def456.css"], ...}}

The table is built once before the server starts and never changes.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping

from libs.em_common import get_logger

logger = get_logger("assets")


@dataclass(frozen=True)
class AssetHashes:
    bundle: str = ""
    styles: str = ""
    vendor: str = ""
    vendor_styles: str = ""

    def as_view(self) -> Dict[str, str]:
        return {
            "bundleHash": self.bundle,
            "stylesHash": self.styles,
            "vendorHash": self.vendor,
            "vendorStylesHash": self.vendor_styles,
        }


EMPTY_HASHES = AssetHashes()


def get_hash(key: str, ext: str, manifest: Mapping[str, Any]) -> str:
    """
    "bundle.abc123.js" → "abc123"
    A list of filenames is filtered on the extension, first match wins.
    Raises KeyError / ValueError when the chunk is absent.
    """
    entry = manifest["assetsByChunkName"][key]
    if isinstance(entry, str):
        filename = entry
    else:
        matches = [f for f in entry if f.endswith("." + ext)]
        if not matches:
            raise ValueError(f"no .{ext} file for chunk {key!r}")
        filename = matches[0]
    return filename.replace("." + ext, "", 1).replace(key + ".", "", 1)


def read_manifest_hashes(path: Path) -> AssetHashes:
    with open(path, "r", encoding="utf-8") as f:
        manifest = json.load(f)
    return AssetHashes(
        bundle=get_hash("bundle", "js", manifest),
        styles=get_hash("styles", "css", manifest),
        vendor=get_hash("vendor", "js", manifest),
        vendor_styles=get_hash("vendor", "css", manifest),
    )


def manifest_path(static_path: str, locale: str) -> Path:
    return Path(static_path) / "dist" / f"manifest_{locale}.json"


def load_asset_hashes(static_path: str, locales: list[str]) -> Mapping[str, AssetHashes]:
    table: Dict[str, AssetHashes] = {}
    for locale in locales:
        try:
            table[locale] = read_manifest_hashes(manifest_path(static_path, locale))
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("couldn't load manifest for locale %s: %s", locale, e)
    logger.info("Asset hashes loaded for %d/%d locales", len(table), len(locales))
    return MappingProxyType(table)


def hashes_for(table: Mapping[str, AssetHashes], locale: str, default_locale: str = "en") -> AssetHashes:
    if locale in table:
        return table[locale]
    return table.get(default_locale, EMPTY_HASHES)
