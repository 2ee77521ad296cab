"""Shared fixtures: the shipped lookup tables, and a small hand-built set."""

import pytest

from plutonian.config import Settings
from plutonian.loader import load_tables
from plutonian.models import RGB, LookupTables, StarRecord, StellarProperties


@pytest.fixture(scope="session")
def shipped_tables() -> LookupTables:
    """Tables from resources/, as the audit script loads them."""
    return load_tables(Settings())


@pytest.fixture
def small_tables() -> LookupTables:
    """A few rows per table, enough to exercise every lookup tier."""
    return LookupTables(
        trl={
            "G2V": StellarProperties(
                mass=1.0, luminosity=1.0, radius=1.0, temp=5770.0, ci=0.65, absmag=4.8,
                color=RGB(1.0, 0.95, 0.9),
            ),
            "A0V": StellarProperties(mass=2.4, luminosity=40.0, radius=2.2, temp=9700.0, ci=0.0),
            "B9V": StellarProperties(mass=3.0, luminosity=80.0, radius=2.6, temp=10700.0, ci=-0.07),
            "A5II": StellarProperties(mass=6.0, luminosity=900.0, temp=8100.0),
            "DA3": StellarProperties(mass=0.6, luminosity=0.016, radius=0.015, temp=17000.0),
        },
        tl={
            "K-III": StellarProperties(mass=3.4, luminosity=100.0, radius=17.0, temp=4400.0),
            "DA-": StellarProperties(mass=99.0),
        },
        lum_by_mag={
            "G2": {"V": 4.8, "III": 0.9},
            "G3": {"IV": 2.0, "III": 0.0},
            "G5": {"V": 5.1, "Ia": -8.0},
        },
        blackbody={5700: RGB(1.0, 0.945, 0.895), 17000: RGB(0.69, 0.79, 1.0)},
    )


@pytest.fixture
def sun() -> StarRecord:
    return StarRecord.from_hyg(
        {"id": 0, "proper": "Sol", "spect": "G2V", "absmag": 4.83, "lum": 1.0, "ci": 0.65}
    )
