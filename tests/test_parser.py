"""Tests for the spectral string tokenizer."""

import pytest

from plutonian.models import SpectrumRole
from plutonian.parser import parse_spectrum, split_spectrum, strip_whitespace, transform_spectrum


class TestParseSpectrum:
    def test_simple_main_sequence(self):
        """'G2V' parses into type, range and luminosity class."""
        (component,) = parse_spectrum("G2V")
        assert component.role is SpectrumRole.PRIMARY
        assert component.type_key == "G"
        assert component.range_key == "2"
        assert component.range_value == 2.0
        assert component.luminosity_key == "V"
        assert component.mods == []

    def test_yerkes_subdwarf_prefix(self):
        """The 'sd' prefix becomes luminosity class VI."""
        (component,) = parse_spectrum("sdB5")
        assert (component.type_key, component.range_key, component.luminosity_key) == ("B", "5", "VI")

    def test_yerkes_dwarf_prefix(self):
        (component,) = parse_spectrum("dM3")
        assert component.key == "M3V"

    def test_explicit_class_overrides_prefix(self):
        (component,) = parse_spectrum("gK0IV")
        assert component.luminosity_key == "IV"

    def test_lower_case_type_is_not_a_prefix(self):
        """'g2v' is a lower-case G2V, not a giant prefix."""
        (component,) = parse_spectrum("g2v")
        assert component.key == "G2V"

    def test_composite_roles(self):
        primary, composite = parse_spectrum("A5/8II")
        assert primary.role is SpectrumRole.PRIMARY
        assert primary.range_key == "5"
        assert primary.luminosity_key == ""
        assert composite.role is SpectrumRole.COMPOSITE
        assert composite.type_key == ""
        assert composite.range_key == "8"
        assert composite.luminosity_key == "II"

    def test_intermediate_roles(self):
        primary, intermediate = parse_spectrum("M5III-IV")
        assert primary.key == "M5III"
        assert intermediate.role is SpectrumRole.INTERMEDIATE
        assert intermediate.luminosity_key == "IV"

    def test_range_clamped_to_nine(self):
        (component,) = parse_spectrum("B10")
        assert component.range_key == "9"
        assert component.range_value == 9.0

    def test_fractional_range(self):
        (component,) = parse_spectrum("K2.5III")
        assert component.range_key == "2.5"
        assert component.range_index == 3
        assert component.key == "K3III"

    def test_longest_luminosity_class_wins(self):
        (component,) = parse_spectrum("K0IIIb")
        assert component.luminosity_key == "IIIb"

    def test_hypergiant_notation_translated(self):
        (component,) = parse_spectrum("B0Ia0")
        assert component.luminosity_key == "Ia+"

    def test_carbon_notation_translated(self):
        (component,) = parse_spectrum("C-N5")
        assert component.type_key == "CN"
        assert component.range_key == "5"

    def test_white_dwarf_has_no_luminosity_class(self):
        """'V' after a white dwarf type is the variability suffix."""
        (component,) = parse_spectrum("DA3V")
        assert component.type_key == "DA"
        assert component.luminosity_key == ""
        assert component.mods == ["V"]

    def test_modifiers_collected(self):
        (component,) = parse_spectrum("B2IVne")
        assert component.luminosity_key == "IV"
        assert set(component.mods) == {"n", "e"}

    def test_multi_character_modifier_before_single(self):
        (component,) = parse_spectrum("B8IIIsh")
        assert component.mods == ["sh"]

    def test_wolf_rayet_dust_suffix(self):
        (component,) = parse_spectrum("WC8d")
        assert component.type_key == "WC"
        assert component.mods == ["d"]

    def test_whitespace_ignored(self):
        (component,) = parse_spectrum(" G8 III ")
        assert component.key == "G8III"

    def test_empty_string_gives_empty_primary(self):
        (component,) = parse_spectrum("")
        assert component.role is SpectrumRole.PRIMARY
        assert component.type_key == ""

    @pytest.mark.parametrize("key", ["G2V", "B5VI", "K0III", "A0Ia+", "M2Iab", "F5IV", "DA3"])
    def test_key_round_trip(self, key):
        """Parsing a concatenated key reproduces the same key."""
        (component,) = parse_spectrum(key)
        assert component.key == key


class TestSplitSpectrum:
    def test_first_segment_is_primary(self):
        assert split_spectrum("G8-K0/M1") == [
            (SpectrumRole.PRIMARY, "G8"),
            (SpectrumRole.INTERMEDIATE, "K0"),
            (SpectrumRole.COMPOSITE, "M1"),
        ]

    def test_trailing_separator_dropped(self):
        assert split_spectrum("G8-") == [(SpectrumRole.PRIMARY, "G8")]

    def test_leading_separator_keeps_empty_primary(self):
        assert split_spectrum("/A2") == [(SpectrumRole.PRIMARY, ""), (SpectrumRole.COMPOSITE, "A2")]


def test_transform_applies_one_translation():
    assert transform_spectrum("C-R2Ia-0") == "C-R2Ia+"


def test_transform_leaves_modern_notation_alone():
    assert transform_spectrum("G2V") == "G2V"


def test_strip_whitespace():
    assert strip_whitespace("K0 III  Ba 0.5") == "K0IIIBa0.5"
