"""
Translation completeness per locale, measured against the default locale.
Served as JSON and as an SVG badge sheet (README badges).
"""

from typing import Any, Dict, List, Mapping, Union
from xml.sax.saxutils import escape

from pydantic import BaseModel, Field

from libs.em_common import get_ratio_percent

BADGE_HEIGHT = 20
LABEL_WIDTH = 60
VALUE_WIDTH = 50


class LocaleStatus(BaseModel):
    language: str = Field(..., description="Locale code")
    name: str = Field("", description="Display name of the locale")
    translated: int = Field(..., description="Keys translated in this locale")
    total: int = Field(..., description="Keys in the default locale")
    percent: str = Field(..., description="translated/total, '?' when undefined")


def iter_leaf_keys(tree: Any, prefix: str = ""):
    if isinstance(tree, Mapping):
        for k, v in tree.items():
            yield from iter_leaf_keys(v, f"{prefix}.{k}" if prefix else str(k))
    elif prefix:
        yield prefix, tree


def count_translated(reference: Mapping, tree: Mapping) -> int:
    n = 0
    for key, _ in iter_leaf_keys(reference):
        node: Any = tree
        for part in key.split("."):
            node = node.get(part) if isinstance(node, Mapping) else None
        if isinstance(node, str) and node:
            n += 1
    return n


class TranslationStatus:
    def __init__(self, trees: Mapping[str, Mapping], language_names: Mapping[str, str], default_locale: str = "en"):
        self.trees = trees
        self.language_names = language_names
        self.default_locale = default_locale
        self.total = sum(1 for _ in iter_leaf_keys(trees.get(default_locale, {})))

    def status(self, locale: str) -> LocaleStatus:
        reference = self.trees.get(self.default_locale, {})
        translated = count_translated(reference, self.trees.get(locale) or {})
        return LocaleStatus(
            language=locale,
            name=self.language_names.get(locale, ""),
            translated=translated,
            total=self.total,
            percent=get_ratio_percent(translated, self.total),
        )

    def json(self, locales: Union[str, List[str]]) -> Dict[str, Any]:
        if isinstance(locales, str):
            return self.status(locales).model_dump()
        return {loc: self.status(loc).model_dump() for loc in locales}

    def svg(self) -> str:
        locales = list(self.language_names.keys())
        width = LABEL_WIDTH + VALUE_WIDTH
        height = BADGE_HEIGHT * len(locales)
        rows = [self._badge(self.status(loc), i * BADGE_HEIGHT) for i, loc in enumerate(locales)]
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}">'
            + "".join(rows)
            + "</svg>"
        )

    def _badge(self, st: LocaleStatus, y: int) -> str:
        try:
            value = float(st.percent)
        except ValueError:
            value = 0.0
        if value >= 100:
            color = "#4c1"
        elif value >= 50:
            color = "#dfb317"
        else:
            color = "#e05d44"
        label = escape(st.language)
        text = escape(f"{st.percent}%")
        return (
            f'<g transform="translate(0,{y})">'
            f'<rect width="{LABEL_WIDTH}" height="{BADGE_HEIGHT}" fill="#555"/>'
            f'<rect x="{LABEL_WIDTH}" width="{VALUE_WIDTH}" height="{BADGE_HEIGHT}" fill="{color}"/>'
            f'<g fill="#fff" font-family="Verdana,DejaVu Sans,sans-serif" font-size="11" text-anchor="middle">'
            f'<text x="{LABEL_WIDTH // 2}" y="14">{label}</text>'
            f'<text x="{LABEL_WIDTH + VALUE_WIDTH // 2}" y="14">{text}</text>'
            f"</g></g>"
        )
