"""Data model definitions: catalog records, parsed sub-spectra, and lookup tables."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

MAX_HYG_DIST = 100000.0  # parsecs; HYG sentinel for stars without usable parallax

ROTATION_DEFAULT = 1
ROTATION_FAST = 10
ROTATION_VERY_FAST = 30


class SpectrumRole(str, Enum):
    """Role of a sub-spectrum inside a full spectral string."""

    PRIMARY = "primary"
    INTERMEDIATE = "intermediate"  # after '-', e.g. 'K0' in 'G8-K0'
    COMPOSITE = "composite"  # after '/', e.g. '8' in 'A5/8II'


@dataclass(frozen=True)
class RGB:
    """Color channels in 0.0-1.0."""

    r: float
    g: float
    b: float


@dataclass(frozen=True)
class StellarProperties:
    """One row of a physical-property lookup table. Every field is optional."""

    mass: float | None = None  # M(star) / M(sun)
    luminosity: float | None = None  # L(star) / L(sun)
    radius: float | None = None  # R(star) / R(sun)
    temp: float | None = None  # Kelvin
    ci: float | None = None  # B-V color index
    absmag: float | None = None  # Absolute visual magnitude
    bolo: float | None = None  # Bolometric correction
    color: RGB | None = None


@dataclass(frozen=True)
class SpectralClass:
    """Resolved classification keys copied onto a finished StarRecord."""

    type: str
    range: str
    luminosity: str

    @property
    def key(self) -> str:
        return f"{self.type}{self.range}{self.luminosity}"


@dataclass
class SpectrumComponent:
    """One parsed sub-spectrum, plus the physical values resolved for it."""

    role: SpectrumRole
    spect: str = ""  # the raw segment this component was parsed from
    type_key: str = ""  # 'G', 'DA', 'WN'
    range_key: str = ""  # '2', '9.5'
    range_value: float | None = None  # 0-9
    luminosity_key: str = ""  # 'V', 'III', 'Iab'
    mods: list[str] = field(default_factory=list)  # ordered, unique

    mass: float | None = None
    luminosity: float | None = None
    radius: float | None = None
    temp: float | None = None
    ci: float | None = None
    absmag: float | None = None
    bolo: float | None = None
    color: RGB | None = None
    source: str = ""  # lookup tier that resolved this component ('trl', 'tl', 'default')

    @property
    def range_index(self) -> int | None:
        """Integer subclass used in table keys (rounded half up, at most 9)."""
        if self.range_value is None:
            return None
        return min(9, int(math.floor(self.range_value + 0.5)))

    @property
    def key(self) -> str:
        """Concatenated type + range + luminosity key, e.g. 'G2V'."""
        index = self.range_index
        return f"{self.type_key}{'' if index is None else index}{self.luminosity_key}"

    def to_class(self) -> SpectralClass:
        index = self.range_index
        return SpectralClass(
            type=self.type_key,
            range="" if index is None else str(index),
            luminosity=self.luminosity_key,
        )


def as_float(value: Any) -> float | None:
    """Catalog value → float, treating blanks, NaN and junk as missing."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _as_int(value: Any) -> int | None:
    number = as_float(value)
    return None if number is None else int(number)


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def _as_id(value: Any) -> str:
    """HYG ids arrive as ints, floats ('123.0' from CSV) or strings."""
    number = as_float(value)
    if number is not None and number.is_integer():
        return str(int(number))
    return _as_str(value)


@dataclass
class StarRecord:
    """A single HYG catalog star, augmented in place by the spectrum engine."""

    id: str
    # Observed (HYG)
    ra: float | None = None  # hours
    dec: float | None = None  # degrees
    dist: float | None = None  # parsecs
    x: float | None = None
    y: float | None = None
    z: float | None = None
    mag: float | None = None
    absmag: float | None = None
    ci: float | None = None
    lum: float = 1.0
    spect: str = ""
    hip: int | None = None
    hd: int | None = None
    hr: int | None = None
    gl: str = ""
    bf: str = ""
    proper: str = ""
    bayer: str = ""
    con: str = ""
    var_min: float | None = None
    var_max: float | None = None
    comp: int | None = None  # member of a multiple-star system
    comp_primary: int | None = None
    base: str = ""
    # Computed by the engine
    computed: bool = False  # spectrum inferred rather than parsed
    guess: bool = False  # spectrum is the last-resort default
    mass: float | None = None
    temp: float | None = None
    radius: float | None = None
    r: float | None = None
    g: float | None = None
    b: float | None = None
    rot: int = ROTATION_DEFAULT
    var: bool = False
    dust: bool = False
    envelope: bool = False
    primary: SpectralClass | None = None
    intermediate: list[SpectralClass] = field(default_factory=list)
    composite: list[SpectralClass] = field(default_factory=list)
    description: str = ""

    @classmethod
    def from_hyg(cls, raw: Mapping[str, Any]) -> "StarRecord":
        """Build a record from a raw HYG row (JSON object or CSV dict).

        Blank strings, NaN and non-numeric junk become None. A missing
        ``lum`` defaults to solar.
        """
        lum = as_float(raw.get("lum"))
        return cls(
            id=_as_id(raw.get("id")),
            ra=as_float(raw.get("ra")),
            dec=as_float(raw.get("dec")),
            dist=as_float(raw.get("dist")),
            x=as_float(raw.get("x")),
            y=as_float(raw.get("y")),
            z=as_float(raw.get("z")),
            mag=as_float(raw.get("mag")),
            absmag=as_float(raw.get("absmag")),
            ci=as_float(raw.get("ci")),
            lum=1.0 if lum is None else lum,
            spect=_as_str(raw.get("spect")),
            hip=_as_int(raw.get("hip")),
            hd=_as_int(raw.get("hd")),
            hr=_as_int(raw.get("hr")),
            gl=_as_str(raw.get("gl")),
            bf=_as_str(raw.get("bf")),
            proper=_as_str(raw.get("proper")),
            bayer=_as_str(raw.get("bayer")),
            con=_as_str(raw.get("con")),
            var_min=as_float(raw.get("var_min")),
            var_max=as_float(raw.get("var_max")),
            comp=_as_int(raw.get("comp")),
            comp_primary=_as_int(raw.get("comp_primary")),
            base=_as_str(raw.get("base")),
        )

    @property
    def display_name(self) -> str:
        """Proper name, else Bayer/Flamsteed, else Bayer + constellation, else id."""
        if self.proper:
            return self.proper
        if self.bf:
            return self.bf
        if self.bayer and self.con:
            return f"{self.bayer}{self.con}"
        return self.id

    @property
    def position(self) -> tuple[float, float, float] | None:
        """Cartesian position in parsecs, from x/y/z or from ra/dec/dist."""
        if self.x is not None and self.y is not None and self.z is not None:
            return (self.x, self.y, self.z)
        if self.ra is None or self.dec is None or self.dist is None:
            return None
        a = math.radians(self.ra * 15)
        d = math.radians(self.dec)
        return (
            math.cos(d) * math.cos(a) * self.dist,
            math.cos(d) * math.sin(a) * self.dist,
            math.sin(d) * self.dist,
        )

    @property
    def color(self) -> RGB | None:
        if self.r is None or self.g is None or self.b is None:
            return None
        return RGB(self.r, self.g, self.b)


@dataclass
class ClassificationStats:
    """Increment-only counters of which path each record took."""

    total: int = 0
    parsed: int = 0
    computed: int = 0
    last_ditch: int = 0
    failed_lookup: int = 0

    def __add__(self, other: "ClassificationStats") -> "ClassificationStats":
        return ClassificationStats(
            total=self.total + other.total,
            parsed=self.parsed + other.parsed,
            computed=self.computed + other.computed,
            last_ditch=self.last_ditch + other.last_ditch,
            failed_lookup=self.failed_lookup + other.failed_lookup,
        )

    def as_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "parsed": self.parsed,
            "computed": self.computed,
            "lastDitch": self.last_ditch,
            "failedLookup": self.failed_lookup,
        }


@dataclass(frozen=True)
class LookupTables:
    """Loaded lookup tables. ``None`` means the table was never loaded;
    an empty mapping means loading was attempted and failed."""

    trl: dict[str, StellarProperties] | None = None  # 'G2V' → properties
    tl: dict[str, StellarProperties] | None = None  # 'G-V' → averaged properties
    lum_by_mag: dict[str, dict[str, float]] | None = None  # 'G2' → {'V': 4.8, ...}
    blackbody: dict[int, RGB] | None = None  # 5800 → RGB

    @property
    def loaded(self) -> bool:
        return None not in (self.trl, self.tl, self.lum_by_mag, self.blackbody)
