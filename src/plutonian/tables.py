"""Built-in lookup tables for the Harvard/Yerkes spectral grammar.

Every table here is a process-wide constant. Matching against them goes
through ``KeyMatcher``, which makes the longest-match-wins rule explicit
instead of relying on dict iteration order.
"""

from typing import Iterable

from plutonian.models import RGB, StellarProperties


class KeyMatcher:
    """Longest-match-wins lookup over a fixed set of string keys.

    Keys are held sorted by descending length (ties keep declaration order),
    so the first hit of a linear scan is always the longest key.
    """

    def __init__(self, keys: Iterable[str]) -> None:
        unique = [k for k in dict.fromkeys(keys) if k]
        self._keys: tuple[str, ...] = tuple(sorted(unique, key=len, reverse=True))

    @property
    def keys(self) -> tuple[str, ...]:
        return self._keys

    def match_prefix(self, text: str) -> str | None:
        """Return the longest key that ``text`` starts with, or None."""
        for key in self._keys:
            if text.startswith(key):
                return key
        return None

    def find(self, text: str) -> tuple[str, int] | None:
        """Return (key, index) of the longest key found anywhere in ``text``."""
        for key in self._keys:
            index = text.find(key)
            if index != -1:
                return key, index
        return None


# --- Type codes ---

# [prefix] [type code] [numeric code 0-9] [luminosity] [suffix]
TYPE_DESCRIPTIONS: dict[str, str] = {
    "W": "Wolf-Rayet star, helium-fusing, mass loss through stellar wind, expanding atmospheric envelope",
    "WR": "Wolf-Rayet star, young and massive",
    "WC": "Wolf-Rayet star, strong Carbon and Helium lines, Helium absent",
    "WN": "Wolf-Rayet star, strong Helium and Nitrogen lines",
    "WNh": "Wolf-Rayet star, young and massive, strong Nitrogen lines with hydrogen",
    "WO": "Wolf-Rayet star, strong Oxygen lines, weak Carbon lines",
    "WC10": "Wolf-Rayet star, strong Carbon lines, cool",
    "WC11": "Wolf-Rayet star, strong Carbon lines, coolest",
    "WN10": "Wolf-Rayet star, strong Nitrogen lines, cool",
    "WN11": "Wolf-Rayet star, strong Nitrogen lines, coolest",
    "O": "Blue, luminous ultra-hot star",
    "B": "Blue-white star",
    "A": "White star",
    "F": "Yellow-white star",
    "G": "Yellow star",
    "K": "Yellow-orange star",
    "M": "Red star",
    "MS": "Red giant, younger, asymptotic-giant branch carbon star",
    "S": "Red giant, asymptotic-giant-branch carbon star, zirconium oxide in spectrum",
    "SC": "Red giant, older, asymptotic-giant branch carbon star, high carbon",
    "R": "Red giant, carbon star equivalent of late G to early K-type stars",
    "N": "Red giant, older carbon star, giant equivalent of late K to M-type stars",
    "C": "Red giant, carbon star",
    "CR": "Red giant, carbon star, equivalent of late G to early K-type stars",
    "CN": "Red giant, carbon star, older, giant equivalent of late K to M-type stars",
    "CJ": "Red giant, carbon star, cool, with a high content of carbon-13",
    "CH": "Red giant, carbon star, Population II analogue of the C-R stars",
    "CHd": "Red giant, carbon star, hydrogen-deficient, similar to late G supergiants with CH and C2 bands",
    "D": "White dwarf",
    "DA": "White dwarf, hydrogen-rich atmosphere, strong Balmer hydrogen spectral lines",
    "DB": "White dwarf, helium-rich atmosphere, 15-30,000K, neutral helium (He I) spectral lines",
    "DO": "White dwarf, very hot, helium-rich atmosphere, ionized helium, 45-120,000K, He II spectral lines",
    "DQ": "White dwarf, carbon-rich atmosphere, < 13,000K, atomic or molecular carbon lines",
    "DZ": "White dwarf, cool, metal-rich atmosphere, < 11,000K",
    "DG": "White dwarf, cool, metal-rich atmosphere, 6000K (old classification)",
    "DK": "White dwarf, metal-rich atmosphere (old classification)",
    "DM": "White dwarf, metal-rich atmosphere (old classification)",
    "DF": "White dwarf, metal-rich, CaII, FeI, no hydrogen (old classification)",
    "DC": "White dwarf, cool, no strong spectral lines, < 11,000K",
    "DX": "White dwarf, spectral lines unclear",
    "DAB": "White dwarf, hydrogen- and helium-rich, neutral helium lines",
    "DAO": "White dwarf, hydrogen- and helium-rich, ionized helium lines",
    "DAZ": "White dwarf, hydrogen-rich, metallic lines",
    "DBZ": "White dwarf, helium-rich, metallic lines",
    "L": "Hot brown dwarf, lithium in atmosphere",
    "T": "Cool brown dwarf, methane in atmosphere",
    "Y": "Gas giant, warm, able to fuse deuterium",
    "P": "Gas giant, cold, Jupiter-like",
}


def is_white_dwarf(type_key: str) -> bool:
    """White dwarfs (D*) carry no luminosity class."""
    return type_key.startswith("D")


def is_wolf_rayet(type_key: str) -> bool:
    return type_key.startswith("W")


def _props(
    mass: float,
    lum: float,
    radius: float,
    temp: float,
    ci: float | None,
    absmag: float,
    bolo: float,
    color: tuple[float, float, float],
) -> StellarProperties:
    return StellarProperties(
        mass=mass,
        luminosity=lum,
        radius=radius,
        temp=temp,
        ci=ci,
        absmag=absmag,
        bolo=bolo,
        color=RGB(*color),
    )


_WOLF_RAYET = _props(20.0, 300000.0, 2.0, 50000.0, -0.3, -5.5, -4.5, (0.598529412, 0.683578431, 1.0))
_CARBON = _props(2.0, 5000.0, 250.0, 3000.0, 2.5, -1.5, -2.0, (1.0, 0.828186274, 0.576078431))
_WHITE_DWARF = _props(0.6, 0.003, 0.012, 10000.0, 0.0, 12.0, -0.4, (0.798823529, 0.834901961, 0.984313726))


def _white_dwarf(temp: float, ci: float) -> StellarProperties:
    radius = _WHITE_DWARF.radius
    return StellarProperties(
        mass=_WHITE_DWARF.mass,
        luminosity=radius**2 * (temp / 5778.0) ** 4,
        radius=radius,
        temp=temp,
        ci=ci,
        absmag=_WHITE_DWARF.absmag,
        bolo=_WHITE_DWARF.bolo,
        color=_WHITE_DWARF.color,
    )


# Coarse per-type defaults, the last lookup tier. Values are typical
# main-sequence (or class-typical) figures; colors are per-type averages.
TYPE_DEFAULTS: dict[str, StellarProperties] = {
    "W": _WOLF_RAYET,
    "WR": _WOLF_RAYET,
    "WC": _WOLF_RAYET,
    "WN": _WOLF_RAYET,
    "WNh": _WOLF_RAYET,
    "WO": _props(20.0, 400000.0, 1.0, 150000.0, -0.4, -5.0, -6.0, (0.598529412, 0.683578431, 1.0)),
    "WC10": _props(15.0, 150000.0, 6.0, 30000.0, -0.2, -5.0, -3.0, (0.598529412, 0.683578431, 1.0)),
    "WC11": _props(15.0, 100000.0, 8.0, 25000.0, -0.2, -5.0, -2.5, (0.598529412, 0.683578431, 1.0)),
    "WN10": _props(15.0, 200000.0, 15.0, 25000.0, -0.2, -6.0, -2.5, (0.598529412, 0.683578431, 1.0)),
    "WN11": _props(15.0, 200000.0, 20.0, 20000.0, -0.2, -6.5, -2.0, (0.598529412, 0.683578431, 1.0)),
    "O": _props(40.0, 300000.0, 10.0, 38000.0, -0.32, -5.5, -3.5, (0.598529412, 0.683578431, 1.0)),
    "B": _props(6.0, 800.0, 4.0, 17000.0, -0.18, -1.1, -1.6, (0.680490196, 0.759068627, 1.0)),
    "A": _props(2.0, 20.0, 1.8, 8600.0, 0.15, 1.5, -0.1, (0.790196078, 0.839607843, 1.0)),
    "F": _props(1.3, 3.0, 1.3, 6500.0, 0.45, 3.4, -0.03, (0.933382353, 0.930392157, 0.991470588)),
    "G": _props(1.0, 1.0, 1.0, 5700.0, 0.65, 4.8, -0.07, (1.0, 0.925686274, 0.830882353)),
    "K": _props(0.7, 0.25, 0.75, 4500.0, 1.0, 6.6, -0.5, (1.0, 0.836421569, 0.629656863)),
    "M": _props(0.3, 0.02, 0.35, 3300.0, 1.5, 10.5, -2.0, (1.0, 0.755686275, 0.421764706)),
    "MS": _props(1.5, 3000.0, 150.0, 3200.0, 1.8, -1.0, -2.5, (1.0, 0.755686275, 0.421764706)),
    "S": _props(1.5, 4000.0, 200.0, 3000.0, 1.9, -1.2, -2.5, (1.0, 0.755686275, 0.421764706)),
    "SC": _props(1.5, 5000.0, 250.0, 2900.0, 2.2, -1.3, -2.7, (1.0, 0.755686275, 0.421764706)),
    "R": _props(1.5, 100.0, 12.0, 4700.0, 1.0, 0.0, -0.4, (1.0, 0.868921569, 0.705735294)),
    "N": _props(2.0, 5000.0, 250.0, 2800.0, 2.5, -1.5, -2.5, (0.987654321, 0.746356814, 0.416557734)),
    "C": _CARBON,
    "CR": _props(1.5, 100.0, 12.0, 4700.0, 1.0, 0.0, -0.4, (1.0, 0.868921569, 0.705735294)),
    "CN": _CARBON,
    "CJ": _CARBON,
    "CH": _CARBON,
    "CHd": _props(1.0, 10000.0, 50.0, 5500.0, 0.9, -3.0, -0.2, (1.0, 0.868921569, 0.705735294)),
    "D": _WHITE_DWARF,
    "DA": _white_dwarf(15000.0, -0.1),
    "DB": _white_dwarf(20000.0, -0.15),
    "DO": _white_dwarf(60000.0, -0.33),
    "DQ": _white_dwarf(9000.0, 0.1),
    "DZ": _white_dwarf(8000.0, 0.3),
    "DG": _white_dwarf(6000.0, 0.55),
    "DK": _white_dwarf(5000.0, 0.8),
    "DM": _white_dwarf(4000.0, 1.2),
    "DF": _white_dwarf(6500.0, 0.45),
    "DC": _white_dwarf(7000.0, 0.4),
    "DX": _WHITE_DWARF,
    "DAB": _white_dwarf(25000.0, -0.2),
    "DAO": _white_dwarf(50000.0, -0.3),
    "DAZ": _white_dwarf(12000.0, -0.05),
    "DBZ": _white_dwarf(15000.0, -0.1),
    "L": _props(0.07, 0.0001, 0.1, 1800.0, None, 14.0, -4.5, (1.0, 0.4235294, 0.0)),
    "T": _props(0.05, 0.00001, 0.1, 1000.0, None, 16.0, -5.0, (1.0, 0.219607843, 0.0)),
    "Y": _props(0.02, 0.000001, 0.1, 450.0, None, 20.0, -6.0, (1.0, 0.3, 0.1)),
    "P": _props(0.001, 1e-09, 0.1, 130.0, None, 26.0, -8.0, (0.4034, 0.27153, 0.1235)),
}


# --- Luminosity classes (Morgan-Keenan) ---

# Class '0' (hypergiant) is reached through NOTATION_TRANSLATIONS as 'Ia+';
# a bare trailing '0' would be read as part of the numeric range.
LUMINOSITY_DESCRIPTIONS: dict[str, str] = {
    "Ia+": "Hypergiant",
    "Ia": "Highly Luminous Supergiant",
    "Iab": "Intermediate size Luminous Supergiant",
    "Ib": "Less Luminous Supergiant",
    "I": "Supergiant",
    "II": "Bright Giant",
    "IIa": "Luminous Bright Giant",
    "IIb": "Less Luminous Bright Giant",
    "III": "Giant",
    "IIIa": "Luminous Giant",
    "IIIb": "Less Luminous Giant",
    "IV": "Sub-Giant",
    "IVa": "Luminous Sub-Giant",
    "IVb": "Less Luminous Sub-Giant",
    "V": "Dwarf (Main Sequence)",
    "Va": "Luminous Dwarf (Main Sequence)",
    "Vb": "Less Luminous Dwarf (Main Sequence)",
    "VI": "Sub-Dwarf",
    "VIa": "Luminous Sub-Dwarf",
    "VIb": "Less Luminous Sub-Dwarf",
    "VII": "White-Dwarf",
    "VIIa": "Luminous White-Dwarf",
    "VIIb": "Less Luminous White-Dwarf",
}

# Yerkes prefixes in front of the type letter, e.g. sdB5 → B5VI
YERKES_PREFIXES: dict[str, str] = {
    "sd": "VI",
    "d": "V",
    "sg": "I",
    "g": "III",
    "c": "Ia",
}


# --- Modifier suffixes ---

# Whitespace is stripped from spectra before parsing, so multi-word
# suffixes ('He wk', 'delta del') are keyed without spaces.
GLOBAL_SUFFIXES: dict[str, str] = {
    ":": "uncertain values",
    "...": "peculiar, truncated spectra",
    "!": "special peculiarities",
    "deltadel": "chemically peculiar, hot main-sequence, sharp metallic absorption lines, contrasting broad neutral helium absorption lines",
    "comp": "composite spectrum",
    "+": "composite spectrum",
    "e": "emission lines present",
    "(e)": "forbidden emission lines present",
    "[e]": "forbidden emission lines present",
    "er": "emission lines reversed with center of emission lines weaker than edges",
    "eq": "emission lines with P Cygni profile",
    "f": "N III and He II emission",
    "f*": "N IV 4058A stronger than the N III 4634A, 4640A and 4642A lines",
    "f+": "Si IV 4089A and 4116A emitted in addition to the N III line",
    "(f)": "N III emission, absence or weak absorption of He II",
    "((f))": "He II and weak N III emission",
    "f?p": "strong magnetic field",
    "h": "WR stars with hydrogen emission lines",
    "ha": "WR stars with hydrogen seen in both absorption and emission",
    "Hewk": "weak Helium lines",
    "k": "spectra contains interstellar absorption features",
    "m": "enhanced metal features",
    "n": 'broad ("nebulous") absorption due to spinning',
    "nn": "very broad absorption features",
    "neb": "a nebula spectrum is mixed in",
    "p": "chemically peculiar star",
    "pec": "peculiar spectrum",
    "pq": "peculiar, similar to nova spectrum",
    "q": "P Cygni type, expanding gaseous envelope",
    "s": "narrow absorption lines",
    "ss": "very narrow absorption lines",
    "sh": "shell star features",
    "v": "variable spectral feature",
    "var": "variable spectral features",
    "w": "weak spectral lines",
    "wl": "weak spectral lines",
    "wk": "weak spectral lines",
    "Ba": "strong Barium lines",
    "CN": "strong cyanogen bands",
    "Sr": "strong Strontium emission lines",
    "He": "strong Helium emission lines",
    "Eu": "strong Europium emission lines",
    "Si": "strong Silicon emission lines",
    "Hg": "strong Mercury emission lines",
    "Mn": "strong Manganese emission lines",
    "Cr": "strong Chromium emission lines",
    "Fe": "strong Iron emission lines",
    "K": "strong Potassium emission lines",
}

WHITE_DWARF_SUFFIXES: dict[str, str] = {
    ":": "uncertain spectral class",
    "P": "magnetic white dwarf with detectable polarization",
    "E": "white dwarf with emission lines present",
    "H": "magnetic white dwarf without detectable polarization",
    "V": "variable white dwarf",
    "PEC": "peculiarities exist",
}

WOLF_RAYET_SUFFIXES: dict[str, str] = {
    "h": "hydrogen emission",
    "ha": "hydrogen emission and absorption",
    "w": "weak lines",
    "s": "strong lines",
    "b": "broad strong lines",
    "d": "dust",
    "vd": "variable dust",
    "pd": "periodic dust",
    "ed": "episodic dust",
}

VARIABLE_MODS = frozenset({"v", "var"})
WHITE_DWARF_VARIABLE_MODS = frozenset({"V"})
ENVELOPE_MODS = frozenset({"q", "eq", "pq", "sh"})
WOLF_RAYET_DUST_MODS = frozenset({"d", "vd", "pd", "ed"})


def suffix_table(type_key: str) -> dict[str, str]:
    """Modifier descriptions for a type; family tables override global text."""
    if is_white_dwarf(type_key):
        return {**GLOBAL_SUFFIXES, **WHITE_DWARF_SUFFIXES}
    if is_wolf_rayet(type_key):
        return {**GLOBAL_SUFFIXES, **WOLF_RAYET_SUFFIXES}
    return GLOBAL_SUFFIXES


# --- Notation translation (historical → modern) ---

NOTATION_TRANSLATIONS: dict[str, str] = {
    "Ia-0": "Ia+",
    "0-Ia": "Ia+",
    "Ia0": "Ia+",
    "Ia-ab": "Iab",
    "Ia/ab": "Iab",
    "Iab-b": "Iab",
    "C-Hd": "CHd",
    "C-R": "CR",
    "C-N": "CN",
    "C-J": "CJ",
    "C-H": "CH",
    "esd": "sd",
    "usd": "sd",
}


TYPE_MATCHER = KeyMatcher(TYPE_DESCRIPTIONS)
LUMINOSITY_MATCHER = KeyMatcher(LUMINOSITY_DESCRIPTIONS)
YERKES_MATCHER = KeyMatcher(YERKES_PREFIXES)
TRANSLATION_MATCHER = KeyMatcher(NOTATION_TRANSLATIONS)
_SUFFIX_MATCHERS: dict[str, KeyMatcher] = {
    "global": KeyMatcher(GLOBAL_SUFFIXES),
    "white_dwarf": KeyMatcher([*WHITE_DWARF_SUFFIXES, *GLOBAL_SUFFIXES]),
    "wolf_rayet": KeyMatcher([*WOLF_RAYET_SUFFIXES, *GLOBAL_SUFFIXES]),
}


def suffix_matcher(type_key: str) -> KeyMatcher:
    if is_white_dwarf(type_key):
        return _SUFFIX_MATCHERS["white_dwarf"]
    if is_wolf_rayet(type_key):
        return _SUFFIX_MATCHERS["wolf_rayet"]
    return _SUFFIX_MATCHERS["global"]


def type_default(type_key: str) -> StellarProperties | None:
    """TypeDefaults lookup. Subtypes missing from the table use their letter."""
    props = TYPE_DEFAULTS.get(type_key)
    if props is None and type_key:
        props = TYPE_DEFAULTS.get(type_key[0])
    return props
