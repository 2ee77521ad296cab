"""Loading layer: lookup tables (JSON files or URLs) and HYG catalog ingestion."""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence, TypeVar

import httpx
import pandas as pd

from plutonian.config import Settings, is_url
from plutonian.models import RGB, LookupTables, StarRecord, StellarProperties, as_float

logger = logging.getLogger(__name__)

T = TypeVar("T")

# HYG v3 columns the engine reads; everything else is dropped on ingestion
HYG_COLUMNS = (
    "id", "hip", "hd", "hr", "gl", "bf", "proper", "ra", "dec", "dist",
    "mag", "absmag", "spect", "ci", "x", "y", "z", "bayer", "con", "lum",
    "var_min", "var_max", "comp", "comp_primary", "base",
)


class TableLoadError(Exception):
    """A lookup table source could not be read."""


class CatalogError(Exception):
    """The catalog document is unusable as a whole."""


def read_table_text(
    source: str | Path,
    timeout: float = 10.0,
    retries: int = 2,
    client: httpx.Client | None = None,
) -> str:
    """Read a table source: a local path, or an http(s) URL fetched with retries.

    Raises:
        TableLoadError: When the file is unreadable or every HTTP attempt fails.
    """
    source = str(source)
    if not is_url(source):
        try:
            return Path(source).read_text(encoding="utf-8")
        except OSError as exc:
            raise TableLoadError(f"cannot read {source}: {exc}") from exc

    last_error: Exception | None = None
    for attempt in range(1 + max(retries, 0)):
        try:
            if client is not None:
                resp = client.get(source, timeout=timeout)
            else:
                resp = httpx.get(source, timeout=timeout)
            resp.raise_for_status()
            return resp.text
        except httpx.HTTPError as exc:
            last_error = exc
            logger.warning("fetch %s failed (attempt %d): %s", source, attempt + 1, exc)
    raise TableLoadError(f"cannot fetch {source}: {last_error}") from last_error


def _decode(text: str, name: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("table %s is not valid JSON: %s", name, exc)
        return None


def _row_to_properties(row: Mapping[str, Any]) -> StellarProperties:
    r, g, b = (as_float(row.get(c)) for c in ("r", "g", "b"))
    return StellarProperties(
        mass=as_float(row.get("mass")),
        luminosity=as_float(row.get("luminosity")),
        radius=as_float(row.get("radius")),
        temp=as_float(row.get("temp")),
        ci=as_float(row.get("ci")),
        absmag=as_float(row.get("absmag")),
        bolo=as_float(row.get("bolo")),
        color=None if r is None or g is None or b is None else RGB(r, g, b),
    )


def load_properties_table(text: str, name: str = "properties") -> dict[str, StellarProperties]:
    """Parse a TRL or TL document: ``{"G2V": {"mass": 1.0, "temp": 5770, ...}}``.

    Malformed JSON gives an empty table; malformed rows are skipped.
    """
    data = _decode(text, name)
    if not isinstance(data, dict):
        if data is not None:
            logger.warning("table %s is not a JSON object", name)
        return {}
    table = {key: _row_to_properties(row) for key, row in data.items() if isinstance(row, dict)}
    if len(table) != len(data):
        logger.warning("table %s: skipped %d malformed rows", name, len(data) - len(table))
    return table


def load_lum_by_mag(text: str) -> dict[str, dict[str, float]]:
    """Parse LumByMag: ``{"G2": {"V": 4.8, "III": 0.9, ...}}``. Row order is kept."""
    data = _decode(text, "lumbymag")
    if not isinstance(data, dict):
        return {}
    table: dict[str, dict[str, float]] = {}
    for key, row in data.items():
        if not isinstance(row, dict):
            continue
        mags = {lum: mag for lum, mag in ((k, as_float(v)) for k, v in row.items()) if mag is not None}
        if mags:
            table[key] = mags
    return table


def load_blackbody(text: str) -> dict[int, RGB]:
    """Parse BlackbodyColor: ``{"5800": {"r": 1.0, "g": 0.93, "b": 0.87}}``."""
    data = _decode(text, "blackbody")
    if not isinstance(data, dict):
        return {}
    table: dict[int, RGB] = {}
    for key, row in data.items():
        temp = as_float(key)
        if temp is None or not isinstance(row, dict):
            continue
        r, g, b = (as_float(row.get(c)) for c in ("r", "g", "b"))
        if r is None or g is None or b is None:
            continue
        table[int(temp)] = RGB(r, g, b)
    return table


def _load_one(
    settings: Settings,
    name: str,
    parse: Callable[[str], T],
    empty: T,
    client: httpx.Client | None,
) -> T:
    source = settings.table_source(name)
    try:
        text = read_table_text(
            source, timeout=settings.http_timeout, retries=settings.http_retries, client=client
        )
    except TableLoadError as exc:
        logger.warning("lookup table unavailable, continuing without it: %s", exc)
        return empty
    return parse(text)


def load_tables(settings: Settings, client: httpx.Client | None = None) -> LookupTables:
    """Load all four lookup tables as a unit.

    Every table is attempted before this returns. A table that fails to
    load is an empty mapping, so lookups fall through to the next tier.
    """
    tables = LookupTables(
        trl=_load_one(settings, settings.trl, lambda t: load_properties_table(t, "trl"), {}, client),
        tl=_load_one(settings, settings.tl, lambda t: load_properties_table(t, "tl"), {}, client),
        lum_by_mag=_load_one(settings, settings.lum_by_mag, load_lum_by_mag, {}, client),
        blackbody=_load_one(settings, settings.blackbody, load_blackbody, {}, client),
    )
    logger.info(
        "loaded lookup tables: trl=%d tl=%d lumbymag=%d blackbody=%d",
        len(tables.trl or {}),
        len(tables.tl or {}),
        len(tables.lum_by_mag or {}),
        len(tables.blackbody or {}),
    )
    return tables


def check_catalog(rows: Sequence[Mapping[str, Any]]) -> None:
    """Sanity-check a catalog by its first entry.

    Raises:
        CatalogError: If the catalog is empty or the first entry has no id.
    """
    if not rows:
        raise CatalogError("catalog has no stars")
    first = rows[0]
    if not isinstance(first, Mapping) or first.get("id") in (None, ""):
        raise CatalogError("first catalog entry has no id")
    if not first.get("spect"):
        logger.info("first catalog entry %s has no spectrum", first.get("id"))
    if any(as_float(first.get(c)) is None for c in ("ra", "dec", "dist")):
        logger.warning("first catalog entry %s has no ra/dec/dist", first.get("id"))


def load_catalog_json(text: str) -> list[StarRecord]:
    """Catalog from a JSON array of HYG objects."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"catalog is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise CatalogError("catalog JSON must be an array of stars")
    check_catalog(data)
    return [StarRecord.from_hyg(row) for row in data if isinstance(row, Mapping)]


def load_hyg_csv(path: str | Path) -> list[StarRecord]:
    """Catalog from a HYG CSV file (hygdata_v3.csv layout).

    Raises:
        CatalogError: If the file cannot be read or fails ``check_catalog``.
    """
    try:
        df = pd.read_csv(path, usecols=lambda column: column in HYG_COLUMNS)
    except (OSError, ValueError) as exc:
        raise CatalogError(f"cannot read HYG catalog {path}: {exc}") from exc
    df = df.astype(object).where(pd.notna(df), None)
    rows = df.to_dict("records")
    check_catalog(rows)
    logger.info("loaded %d stars from %s", len(rows), path)
    return [StarRecord.from_hyg(row) for row in rows]
