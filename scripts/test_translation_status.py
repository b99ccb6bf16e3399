#!/usr/bin/env python3
"""
Tests for translation completeness (JSON and SVG badges)
"""

from services.web.translation_status import TranslationStatus, count_translated, iter_leaf_keys

from conftest import LOCALES_CONFIG, TRANSLATIONS


def make_status():
    return TranslationStatus(TRANSLATIONS, LOCALES_CONFIG["languageNames"])


def test_leaf_keys():
    keys = [k for k, _ in iter_leaf_keys({"a": {"b": "x", "c": {"d": "y"}}, "e": "z"})]
    assert keys == ["a.b", "a.c.d", "e"]


def test_count_translated_ignores_empty_strings():
    reference = {"a": "x", "b": {"c": "y"}}
    assert count_translated(reference, {"a": "", "b": {"c": "z"}}) == 1
    assert count_translated(reference, {}) == 0


def test_single_locale_status():
    st = make_status().json("fr")
    # en has 5 keys, fr translates maintitle and ofinstalled (description is empty)
    assert st == {"language": "fr", "name": "Français", "translated": 2, "total": 5, "percent": "40"}


def test_default_locale_is_complete():
    assert make_status().json("en")["percent"] == "100"


def test_unknown_and_untranslated_locales_do_not_raise():
    status = make_status()
    assert status.json("de")["translated"] == 0
    assert status.json("xx") == {"language": "xx", "name": "", "translated": 0, "total": 5, "percent": "0"}


def test_all_locales_status():
    result = make_status().json(["en", "fr", "de"])
    assert set(result) == {"en", "fr", "de"}
    assert result["fr"]["percent"] == "40"


def test_svg_has_one_badge_per_locale():
    svg = make_status().svg()
    assert svg.startswith("<svg")
    assert svg.count("<rect") == 2 * 3
    assert ">fr<" in svg and ">40%<" in svg
