"""Spectral string tokenizer: raw Harvard/Yerkes text → SpectrumComponent list.

Each sub-spectrum is read left to right as
``[Yerkes prefix][type code][numeric range][luminosity class][modifiers]``.
Every step removes what it matched before the next one runs.
"""

import logging
import re

from plutonian.models import SpectrumComponent, SpectrumRole
from plutonian.tables import (
    LUMINOSITY_MATCHER,
    NOTATION_TRANSLATIONS,
    TRANSLATION_MATCHER,
    TYPE_MATCHER,
    YERKES_MATCHER,
    YERKES_PREFIXES,
    is_white_dwarf,
    suffix_matcher,
)

logger = logging.getLogger(__name__)

_RANGE_RE = re.compile(r"\d+(?:\.\d+)?")
_SEPARATORS = {"-": SpectrumRole.INTERMEDIATE, "/": SpectrumRole.COMPOSITE}
_AMBIGUOUS_PREFIX_SEGMENTS = ("g", "g-")

MAX_RANGE = 9


def strip_whitespace(spect: str) -> str:
    return "".join(spect.split())


def transform_spectrum(spect: str) -> str:
    """Replace the first (longest) historical notation found with its modern form.

    Only one translation is applied per call.
    """
    hit = TRANSLATION_MATCHER.find(spect)
    if hit is None:
        return spect
    key, index = hit
    logger.debug("translated %r in %r", key, spect)
    return spect[:index] + NOTATION_TRANSLATIONS[key] + spect[index + len(key) :]


def split_spectrum(spect: str) -> list[tuple[SpectrumRole, str]]:
    """Split on '-' (intermediate) and '/' (composite), keeping each segment's role.

    The first segment is always PRIMARY, even when empty. Later empty
    segments (e.g. a trailing '-') are dropped.
    """
    segments: list[tuple[SpectrumRole, str]] = []
    role = SpectrumRole.PRIMARY
    current: list[str] = []
    for char in spect:
        if char in _SEPARATORS:
            segments.append((role, "".join(current)))
            role = _SEPARATORS[char]
            current = []
        else:
            current.append(char)
    segments.append((role, "".join(current)))
    return [segments[0]] + [(r, s) for r, s in segments[1:] if s]


def _parse_yerkes_prefix(segment: str, component: SpectrumComponent) -> str:
    if segment in _AMBIGUOUS_PREFIX_SEGMENTS:
        return segment
    prefix = YERKES_MATCHER.match_prefix(segment)
    if prefix is None:
        return segment
    rest = segment[len(prefix) :]
    # 'g2v' is a lower-case type, not a giant prefix
    if TYPE_MATCHER.match_prefix(rest) is None:
        return segment
    component.luminosity_key = YERKES_PREFIXES[prefix]
    return rest


def _parse_type(segment: str, component: SpectrumComponent) -> str:
    type_key = TYPE_MATCHER.match_prefix(segment)
    if type_key is None and component.role is SpectrumRole.PRIMARY and segment[:1].islower():
        segment = segment.upper()
        type_key = TYPE_MATCHER.match_prefix(segment)
    if type_key is None:
        return segment
    component.type_key = type_key
    return segment[len(type_key) :]


def _parse_range(segment: str, component: SpectrumComponent) -> str:
    match = _RANGE_RE.search(segment)
    if match is None:
        return segment
    key = match.group()
    value = float(key)
    if value > MAX_RANGE:
        logger.debug("clamped range %s to %d in %r", key, MAX_RANGE, component.spect)
        key, value = str(MAX_RANGE), float(MAX_RANGE)
    component.range_key = key
    component.range_value = value
    return segment[: match.start()] + segment[match.end() :]


def _parse_luminosity(segment: str, component: SpectrumComponent) -> str:
    if is_white_dwarf(component.type_key):
        return segment
    lum = LUMINOSITY_MATCHER.match_prefix(segment)
    if lum is None:
        return segment
    component.luminosity_key = lum
    return segment[len(lum) :]


def _parse_mods(segment: str, component: SpectrumComponent) -> str:
    for key in suffix_matcher(component.type_key).keys:
        while key in segment:
            segment = segment.replace(key, "", 1)
            if key not in component.mods:
                component.mods.append(key)
    return segment


def parse_component(segment: str, role: SpectrumRole) -> SpectrumComponent:
    """Parse one sub-spectrum segment into a component."""
    component = SpectrumComponent(role=role, spect=segment)
    rest = _parse_yerkes_prefix(segment, component)
    rest = _parse_type(rest, component)
    rest = _parse_range(rest, component)
    rest = _parse_luminosity(rest, component)
    rest = _parse_mods(rest, component)
    if rest:
        logger.debug("unparsed remainder %r in %r", rest, segment)
    return component


def parse_spectrum(spect: str) -> list[SpectrumComponent]:
    """Parse a raw spectral classification string.

    Args:
        spect: Raw HYG ``spect`` value, e.g. 'G2V', 'M5III-IV', 'sdB5', 'A5/8II'.

    Returns:
        Components in string order. The first is PRIMARY; the rest are
        INTERMEDIATE or COMPOSITE depending on the separator before them.
    """
    text = transform_spectrum(strip_whitespace(spect))
    return [parse_component(segment, role) for role, segment in split_spectrum(text)]
