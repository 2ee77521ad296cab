"""Tests for the built-in grammar tables."""

from plutonian.tables import (
    LUMINOSITY_DESCRIPTIONS,
    TYPE_DEFAULTS,
    TYPE_DESCRIPTIONS,
    KeyMatcher,
    suffix_table,
    type_default,
)


class TestKeyMatcher:
    def test_longest_prefix_wins(self):
        matcher = KeyMatcher(["D", "DA", "DAB"])
        assert matcher.match_prefix("DAB3") == "DAB"
        assert matcher.match_prefix("DO3") == "D"
        assert matcher.match_prefix("G2") is None

    def test_find_anywhere(self):
        matcher = KeyMatcher(["Ia0", "Ia-0"])
        assert matcher.find("B1Ia-0") == ("Ia-0", 2)
        assert matcher.find("B1V") is None

    def test_equal_length_keeps_declaration_order(self):
        assert KeyMatcher(["b", "a", "cc", ""]).keys == ("cc", "b", "a")


def test_every_type_has_a_default():
    assert set(TYPE_DEFAULTS) == set(TYPE_DESCRIPTIONS)
    for props in TYPE_DEFAULTS.values():
        assert props.mass is not None
        assert props.radius is not None
        assert props.temp is not None
        assert props.color is not None


def test_subtype_default_falls_back_to_letter():
    assert type_default("WC9") is TYPE_DEFAULTS["WC"]
    assert type_default("MX") is TYPE_DEFAULTS["M"]
    assert type_default("") is None


def test_family_suffix_text_overrides_global():
    assert suffix_table("DA")[":"] == "uncertain spectral class"
    assert suffix_table("G")[":"] == "uncertain values"
    assert suffix_table("WN")["h"] == "hydrogen emission"


def test_luminosity_zero_is_not_a_class():
    assert "0" not in LUMINOSITY_DESCRIPTIONS
