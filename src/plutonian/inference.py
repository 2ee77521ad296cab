"""Fallback classification: infer a spectrum, or a missing luminosity class,
from photometry when the catalog string does not provide it."""

import logging
import re
from typing import Iterable, Mapping

from plutonian.models import MAX_HYG_DIST, SpectrumComponent, StarRecord, StellarProperties
from plutonian.photometry import compute_temp_from_bv
from plutonian.tables import is_white_dwarf

logger = logging.getLogger(__name__)

TEMP_WINDOW = 1000.0  # K, either side of the B-V temperature

HYPERGIANT_ABSMAG = -9.2
BRIGHT_GIANT_ABSMAG = -3.0
GIANT_ABSMAG = 0.0
DWARF_LUM = 0.2

HYPERGIANT_SPECT = "A0Ia+"
BRIGHT_GIANT_SPECT = "B5II"
GIANT_SPECT = "K0III"
BROWN_DWARF_SPECT = "L5V"
LAST_DITCH_DEFAULT = "G5V"

# (minimum luminosity ratio, dwarf subclass), brightest first
_DWARF_LADDER: tuple[tuple[float, str], ...] = (
    (0.072, "M0V"),
    (0.035, "M2V"),
    (0.013, "M3V"),
    (0.0054, "M4V"),
    (0.0022, "M5V"),
    (0.00091, "M6V"),
    (0.00051, "M7V"),
    (0.00029, "M8V"),
    (0.00017, "M9V"),
)

_RANGE_SUFFIX_RE = re.compile(r"\d+(?:\.\d+)?")


def compute_spect_from_hyg(
    record: StarRecord,
    trl: Mapping[str, StellarProperties] | None,
    window: float = TEMP_WINDOW,
) -> str | None:
    """Pick a TRL key whose temperature matches the star's B-V temperature.

    Among all TRL rows within ``window`` Kelvin of the B-V temperature, a
    single candidate wins outright; otherwise the row whose tabulated
    luminosity is closest to the star's ``lum`` wins (first in table order
    on ties).

    Args:
        record: Star without a usable spectral string.
        trl: type+range+luminosity table.
        window: Half-width of the temperature window, Kelvin.

    Returns:
        A spectral key such as 'A0V', or None when there is no color index
        or no candidate. Callers fall back to ``last_ditch_spectrum``.
    """
    temp = compute_temp_from_bv(record.ci)
    if temp is None:
        logger.debug("star %s: no color index, cannot compute spectrum", record.id)
        return None

    candidates = [
        (key, props)
        for key, props in (trl or {}).items()
        if props.temp is not None and abs(props.temp - temp) <= window
    ]
    if not candidates:
        logger.warning("star %s: no TRL entry within %.0fK of %.0fK", record.id, window, temp)
        return None
    if len(candidates) == 1:
        return candidates[0][0]

    best_key = candidates[0][0]
    best_diff = float("inf")
    for key, props in candidates:
        if props.luminosity is None:
            continue
        diff = abs(props.luminosity - record.lum)
        if diff < best_diff:
            best_key, best_diff = key, diff
    return best_key


def last_ditch_spectrum(record: StarRecord) -> str:
    """Assign a spectrum from absolute magnitude and luminosity alone.

    Always returns a key. ``LAST_DITCH_DEFAULT`` means nothing matched.
    """
    absmag = record.absmag
    if absmag is not None:
        if record.dist == MAX_HYG_DIST and absmag < HYPERGIANT_ABSMAG:
            return HYPERGIANT_SPECT
        if absmag < BRIGHT_GIANT_ABSMAG:
            return BRIGHT_GIANT_SPECT
        if absmag <= GIANT_ABSMAG:
            return GIANT_SPECT

    if record.lum < DWARF_LUM:
        for minimum, spect in _DWARF_LADDER:
            if record.lum >= minimum:
                return spect
        return BROWN_DWARF_SPECT

    return LAST_DITCH_DEFAULT


def _closest_class(entries: Iterable[tuple[str, float]], absmag: float) -> str | None:
    best: str | None = None
    best_diff = float("inf")
    for lum_key, mag in entries:
        diff = abs(mag - absmag)
        if diff < best_diff:
            best, best_diff = lum_key, diff
    return best


def lookup_luminosity_class(
    component: SpectrumComponent,
    absmag: float | None,
    lum_by_mag: Mapping[str, Mapping[str, float]] | None,
) -> str | None:
    """Infer a luminosity class from absolute magnitude.

    Uses the LumByMag row for type+range when present; otherwise scans every
    row of the same type (any range). The class whose tabulated magnitude is
    closest to ``absmag`` wins, ties going to the first in table order.

    Returns:
        The class key, '' for white dwarfs (which have none), or None when
        no inference was possible.
    """
    if is_white_dwarf(component.type_key):
        return ""
    if absmag is None or not component.type_key or not lum_by_mag:
        return None

    index = component.range_index
    if index is not None:
        row = lum_by_mag.get(f"{component.type_key}{index}")
        if row:
            return _closest_class(row.items(), absmag)

    type_key = component.type_key
    entries = [
        (lum_key, mag)
        for key, row in lum_by_mag.items()
        if key.startswith(type_key) and _RANGE_SUFFIX_RE.fullmatch(key[len(type_key) :])
        for lum_key, mag in row.items()
    ]
    return _closest_class(entries, absmag)
