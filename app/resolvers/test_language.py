import pytest

from app.resolvers.language import locale_from_accept_language, resolve_language


@pytest.mark.parametrize(
    "locale,expected",
    [
        ("en-US", "en"),
        ("pt-BR", "pt"),
        ("zh-Hant-TW", "zh"),
        ("de", "de"),
        (None, "en"),
        ("", "en"),
    ],
)
def test_resolve_language(locale, expected):
    assert resolve_language(locale) == expected


def test_accept_language_picks_highest_weight():
    assert locale_from_accept_language("fr;q=0.5, de-CH, en;q=0.8") == "de-CH"
    assert locale_from_accept_language("en;q=0.2,es;q=0.9") == "es"


def test_accept_language_ignores_wildcard_and_empty():
    assert locale_from_accept_language("*") is None
    assert locale_from_accept_language("") is None
    assert locale_from_accept_language(None) is None
    assert locale_from_accept_language("*, it;q=0.7") == "it"


def test_accept_language_bad_weight_is_skipped():
    assert locale_from_accept_language("nl;q=abc, sv;q=0.3") == "sv"
