import pytest

from localization import (
    LABELS,
    LANGUAGES,
    delocalize_digits,
    label,
    localize_digits,
    next_language,
)


def test_odia_digits_round_trip():
    text = "12.5+(30)÷4"
    localized = localize_digits(text, "or")
    assert localized == "୧୨.୫+(୩୦)÷୪"
    assert delocalize_digits(localized, "or") == text


def test_ascii_languages_leave_text_untouched():
    assert localize_digits("123", "es") == "123"
    assert delocalize_digits("123", "en") == "123"


def test_error_label_per_language():
    assert label("error", "es") == "Error"
    assert label("error", "en") == "Error"
    assert label("error", "or") == "ତ୍ରୁଟି"


def test_every_language_has_the_same_keys():
    keys = set(LABELS["es"])
    for language in LANGUAGES:
        assert set(LABELS[language]) == keys


def test_unknown_key_falls_back_to_key():
    assert label("missing", "en") == "missing"


def test_unknown_language_is_rejected():
    with pytest.raises(ValueError):
        label("error", "fr")
    with pytest.raises(ValueError):
        localize_digits("1", "fr")


def test_next_language_cycles():
    seen = ["es"]
    for _ in LANGUAGES:
        seen.append(next_language(seen[-1]))
    assert seen[-1] == "es"
    assert set(seen) == set(LANGUAGES)
