"""Property resolver: parsed components → physical values merged onto a StarRecord.

Lookup tiers, first hit wins:
    1. TRL  'G2V'  (type + range + luminosity)
    2. TL   'G-V'  (type + luminosity average; never for white dwarfs)
    3. TYPE_DEFAULTS['G']
"""

import logging

from plutonian.describe import describe
from plutonian.inference import lookup_luminosity_class
from plutonian.models import (
    ROTATION_DEFAULT,
    ROTATION_FAST,
    ROTATION_VERY_FAST,
    LookupTables,
    SpectrumComponent,
    SpectrumRole,
    StarRecord,
    StellarProperties,
)
from plutonian.photometry import (
    blackbody_color,
    compute_color_from_bv,
    compute_radius,
    compute_temp_from_bv,
)
from plutonian.tables import (
    ENVELOPE_MODS,
    VARIABLE_MODS,
    WHITE_DWARF_VARIABLE_MODS,
    WOLF_RAYET_DUST_MODS,
    is_white_dwarf,
    is_wolf_rayet,
    type_default,
)

logger = logging.getLogger(__name__)

FAST_ROTATING_TYPES = ("O", "A", "B", "W")


def fill_forward(components: list[SpectrumComponent]) -> None:
    """Let the primary borrow a missing range or luminosity class from the
    first sub-spectrum that has one."""
    primary, others = components[0], components[1:]
    if primary.range_value is None:
        for other in others:
            if other.range_value is not None:
                primary.range_key, primary.range_value = other.range_key, other.range_value
                break
    if not primary.luminosity_key:
        for other in others:
            if other.luminosity_key:
                primary.luminosity_key = other.luminosity_key
                break


def inherit_from_primary(components: list[SpectrumComponent]) -> None:
    """Fill empty type, range and luminosity of sub-spectra from the primary."""
    primary = components[0]
    for other in components[1:]:
        if not other.type_key:
            other.type_key = primary.type_key
        if other.range_value is None:
            other.range_key, other.range_value = primary.range_key, primary.range_value
        if not other.luminosity_key and not is_white_dwarf(other.type_key):
            other.luminosity_key = primary.luminosity_key


def lookup_properties(
    component: SpectrumComponent, tables: LookupTables
) -> tuple[StellarProperties | None, str]:
    """Run the tiered lookup. Returns (properties, tier name) or (None, '')."""
    if component.range_index is not None:
        hit = (tables.trl or {}).get(component.key)
        if hit is not None:
            return hit, "trl"
    if not is_white_dwarf(component.type_key):
        hit = (tables.tl or {}).get(f"{component.type_key}-{component.luminosity_key}")
        if hit is not None:
            return hit, "tl"
    hit = type_default(component.type_key)
    if hit is not None:
        return hit, "default"
    return None, ""


def resolve_component(
    component: SpectrumComponent, record: StarRecord, tables: LookupTables
) -> bool:
    """Fill a component's physical fields. Returns False if every tier missed.

    Fields absent from the winning row are derived: temperature from the
    star's B-V index, radius from luminosity and temperature, color from
    the blackbody table, then from B-V, then from the type default.
    """
    props, source = lookup_properties(component, tables)
    component.source = source
    if props is None:
        logger.warning(
            "star %s: failed lookup for %r (type %r)", record.id, component.spect, component.type_key
        )
    else:
        component.mass = props.mass
        component.luminosity = props.luminosity
        component.radius = props.radius
        component.temp = props.temp
        component.ci = props.ci
        component.absmag = props.absmag
        component.bolo = props.bolo
        component.color = props.color

    if component.temp is None:
        component.temp = compute_temp_from_bv(record.ci)
    if component.radius is None:
        lum = component.luminosity if component.luminosity is not None else record.lum
        component.radius = compute_radius(lum, component.temp)
    if component.color is None:
        component.color = blackbody_color(component.temp, tables.blackbody)
    if component.color is None:
        ci = record.ci if record.ci is not None else component.ci
        if ci is not None:
            component.color = compute_color_from_bv(ci)
    if component.color is None:
        fallback = type_default(component.type_key)
        component.color = fallback.color if fallback else None
    return props is not None


def rotation_class(component: SpectrumComponent) -> int:
    if "nn" in component.mods:
        return ROTATION_VERY_FAST
    if "n" in component.mods or component.type_key.startswith(FAST_ROTATING_TYPES):
        return ROTATION_FAST
    return ROTATION_DEFAULT


def _is_variable(component: SpectrumComponent) -> bool:
    mods = set(component.mods)
    if mods & VARIABLE_MODS:
        return True
    return is_white_dwarf(component.type_key) and bool(mods & WHITE_DWARF_VARIABLE_MODS)


def _has_dust(component: SpectrumComponent) -> bool:
    return is_wolf_rayet(component.type_key) and bool(set(component.mods) & WOLF_RAYET_DUST_MODS)


def merge(record: StarRecord, components: list[SpectrumComponent]) -> StarRecord:
    """Write resolved values onto the record, then append descriptions in order."""
    primary = components[0]

    if primary.temp is not None:
        record.temp = primary.temp
    if primary.radius is not None:
        record.radius = primary.radius
    if primary.mass is not None:
        record.mass = primary.mass
    if primary.color is not None:
        record.r, record.g, record.b = primary.color.r, primary.color.g, primary.color.b

    record.rot = rotation_class(primary)
    record.var = (
        record.var
        or record.var_min is not None
        or record.var_max is not None
        or any(_is_variable(c) for c in components)
    )
    record.dust = record.dust or any(_has_dust(c) for c in components)
    record.envelope = record.envelope or any(set(c.mods) & ENVELOPE_MODS for c in components)
    record.primary = primary.to_class()

    for component in components[1:]:
        if component.role is SpectrumRole.INTERMEDIATE:
            record.intermediate.append(component.to_class())
        else:
            record.composite.append(component.to_class())

    for component in components:
        record.description += describe(record, component)
    return record


def resolve(
    record: StarRecord, components: list[SpectrumComponent], tables: LookupTables
) -> StarRecord:
    """Resolve every component against the tables and merge onto ``record``.

    Mutates and returns ``record``.
    """
    primary = components[0]
    if not primary.type_key:
        logger.error("star %s: primary spectrum %r has no stellar type", record.id, primary.spect)

    fill_forward(components)
    if primary.type_key and not primary.luminosity_key:
        inferred = lookup_luminosity_class(primary, record.absmag, tables.lum_by_mag)
        if inferred is None:
            logger.debug("star %s: no luminosity class inferred for %r", record.id, primary.spect)
        else:
            primary.luminosity_key = inferred
    inherit_from_primary(components)

    for component in components:
        resolve_component(component, record, tables)
    return merge(record, components)
