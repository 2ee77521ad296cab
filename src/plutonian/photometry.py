"""Photometric approximations: B-V color index to temperature and color."""

import logging
import math
from typing import Mapping

from plutonian.models import RGB

logger = logging.getLogger(__name__)

SOLAR_TEMP = 5778.0  # K

BLACKBODY_MIN_TEMP = 1000
BLACKBODY_MAX_TEMP = 40000
BLACKBODY_STEP = 100


def compute_temp_from_bv(ci: float | None) -> float | None:
    """Approximate effective temperature from the B-V color index.

    Ballesteros (2012): T = 4600 * (1 / (0.92 ci + 1.7) + 1 / (0.92 ci + 0.62)).

    Args:
        ci: B-V color index.

    Returns:
        Temperature in Kelvin, or None if ci is missing or outside the
        range where the formula is defined.
    """
    if ci is None:
        return None
    hot = 0.92 * ci + 1.7
    cool = 0.92 * ci + 0.62
    if hot <= 0 or cool <= 0:
        logger.warning("B-V color index %.3f outside temperature formula domain", ci)
        return None
    return 4600.0 * (1.0 / hot + 1.0 / cool)


def compute_radius(lum: float | None, temp: float | None) -> float | None:
    """Radius in solar units from luminosity ratio and temperature (Stefan-Boltzmann)."""
    if lum is None or temp is None or lum < 0 or temp <= 0:
        return None
    return math.sqrt(lum / (temp / SOLAR_TEMP) ** 4)


def compute_color_from_bv(bv: float) -> RGB:
    """Piecewise approximation of star color from the B-V color index.

    B-V is clamped to [-0.4, 2.0]. Channels outside every band stay 0.
    """
    bv = min(max(bv, -0.4), 2.0)
    r = g = b = 0.0

    if -0.40 <= bv < 0.00:
        t = (bv + 0.40) / (0.00 + 0.40)
        r = 0.61 + (0.11 * t) + (0.1 * t * t)
    elif 0.00 <= bv < 0.40:
        t = (bv - 0.00) / (0.40 - 0.00)
        r = 0.83 + (0.17 * t)
    elif 0.40 <= bv < 2.10:
        r = 1.00

    if -0.40 <= bv < 0.00:
        t = (bv + 0.40) / (0.00 + 0.40)
        g = 0.70 + (0.07 * t) + (0.1 * t * t)
    elif 0.00 <= bv < 0.40:
        t = (bv - 0.00) / (0.40 - 0.00)
        g = 0.87 + (0.11 * t)
    elif 0.40 <= bv < 1.60:
        t = (bv - 0.40) / (1.60 - 0.40)
        g = 0.98 - (0.16 * t)
    elif 1.60 <= bv < 2.00:
        t = (bv - 1.60) / (2.00 - 1.60)
        g = 0.82 - (0.5 * t * t)

    if -0.40 <= bv < 0.40:
        b = 1.00
    elif 0.40 <= bv < 1.50:
        t = (bv - 0.40) / (1.50 - 0.40)
        b = 1.00 - (0.47 * t) + (0.1 * t * t)
    elif 1.50 <= bv < 1.94:
        t = (bv - 1.50) / (1.94 - 1.50)
        b = 0.63 - (0.6 * t * t)

    return RGB(r, g, b)


def blackbody_key(temp: float) -> int:
    """Table key for a temperature: rounded down to 100K, clamped to the table range."""
    key = int(temp // BLACKBODY_STEP) * BLACKBODY_STEP
    return min(max(key, BLACKBODY_MIN_TEMP), BLACKBODY_MAX_TEMP)


def blackbody_color(temp: float | None, table: Mapping[int, RGB] | None) -> RGB | None:
    """Look up a blackbody color. None if the table is missing or has no entry."""
    if temp is None or not table:
        return None
    return table.get(blackbody_key(temp))
