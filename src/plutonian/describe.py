"""Human-readable descriptions of resolved spectral components."""

import re

from plutonian.models import SpectrumComponent, SpectrumRole, StarRecord
from plutonian.tables import LUMINOSITY_DESCRIPTIONS, TYPE_DESCRIPTIONS, suffix_table

_STAR_WORD = re.compile(r"\bstar\b")
UNKNOWN_TYPE = "Unclassified star"


def luminosity_phrase(luminosity_key: str) -> str:
    return LUMINOSITY_DESCRIPTIONS.get(luminosity_key, "")


def type_description(component: SpectrumComponent) -> str:
    """Type text with the word 'star' replaced by the luminosity class, if known."""
    text = TYPE_DESCRIPTIONS.get(component.type_key, UNKNOWN_TYPE)
    phrase = luminosity_phrase(component.luminosity_key)
    if phrase:
        text = _STAR_WORD.sub(phrase, text, count=1)
    return text


def short_description(type_key: str) -> str:
    return TYPE_DESCRIPTIONS.get(type_key, UNKNOWN_TYPE).split(",")[0]


def mods_description(component: SpectrumComponent) -> str:
    table = suffix_table(component.type_key)
    return "".join(f", {table[m]}" for m in component.mods if m in table)


def spectral_label(component: SpectrumComponent) -> str:
    return f"{component.type_key}{component.range_key}{component.luminosity_key}"


def describe(record: StarRecord, component: SpectrumComponent) -> str:
    """Describe one component.

    PRIMARY components give the full 'Type G2V, Yellow Dwarf ...' sentence.
    INTERMEDIATE and COMPOSITE components give a short clause meant to be
    appended after the primary text.
    """
    label = spectral_label(component)
    phrase = luminosity_phrase(component.luminosity_key)
    lum_text = f" {phrase}" if phrase else ""

    if component.role is SpectrumRole.INTERMEDIATE:
        return f", intermediate with {short_description(component.type_key)} {label}{lum_text}"
    if component.role is SpectrumRole.COMPOSITE:
        return (
            f", composite with {short_description(component.type_key)} {label}{lum_text}"
            ", (possible spectroscopic double or multiple star)"
        )

    text = f"Type {label}, {type_description(component)}{mods_description(component)}"
    if record.guess:
        text += ", spectrum guessed"
    elif record.computed:
        text += ", spectrum computed from photometry"
    return text
