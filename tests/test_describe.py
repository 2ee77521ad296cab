"""Tests for component descriptions."""

from plutonian.describe import describe, luminosity_phrase, short_description, type_description
from plutonian.models import SpectrumComponent, SpectrumRole, StarRecord
from plutonian.parser import parse_spectrum


def _component(role: SpectrumRole, type_key: str, range_value: int, lum: str) -> SpectrumComponent:
    return SpectrumComponent(
        role=role,
        type_key=type_key,
        range_key=str(range_value),
        range_value=float(range_value),
        luminosity_key=lum,
    )


def test_primary_description():
    (component,) = parse_spectrum("G2V")
    assert describe(StarRecord(id="0"), component) == "Type G2V, Yellow Dwarf (Main Sequence)"


def test_star_word_kept_without_luminosity_class():
    (component,) = parse_spectrum("K3")
    assert type_description(component) == "Yellow-orange star"


def test_modifier_text_appended():
    (component,) = parse_spectrum("B2IVe")
    assert describe(StarRecord(id="0"), component) == "Type B2IV, Blue-white Sub-Giant, emission lines present"


def test_white_dwarf_suffix_text():
    (component,) = parse_spectrum("DA3V")
    assert describe(StarRecord(id="0"), component).endswith(", variable white dwarf")


def test_intermediate_clause():
    component = _component(SpectrumRole.INTERMEDIATE, "K", 0, "III")
    assert describe(StarRecord(id="0"), component) == ", intermediate with Yellow-orange star K0III Giant"


def test_composite_clause():
    component = _component(SpectrumRole.COMPOSITE, "A", 8, "II")
    assert describe(StarRecord(id="0"), component) == (
        ", composite with White star A8II Bright Giant, (possible spectroscopic double or multiple star)"
    )


def test_guessed_and_computed_markers():
    (component,) = parse_spectrum("G5V")
    assert describe(StarRecord(id="0", computed=True, guess=True), component).endswith(", spectrum guessed")
    assert describe(StarRecord(id="0", computed=True), component).endswith(
        ", spectrum computed from photometry"
    )


def test_short_description_stops_at_first_comma():
    assert short_description("DA") == "White dwarf"
    assert short_description("??") == "Unclassified star"


def test_unknown_luminosity_class_has_no_phrase():
    assert luminosity_phrase("") == ""
    assert luminosity_phrase("Iab") == "Intermediate size Luminous Supergiant"
