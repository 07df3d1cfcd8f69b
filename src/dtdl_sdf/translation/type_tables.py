"""
Type Mapping Tables

Static correspondence between DTDL primitive schemas and SDF data
qualities, and between SenML unit symbols (used by SDF) and DTDL
semantic types/units.

Lookups never raise: an unmapped primitive yields the sentinel string
``unknown (<name>)`` and an unmapped unit yields None so the caller can
omit it.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..sdf.sdf_models import PrimitiveType

logger = logging.getLogger(__name__)

UNKNOWN_TEMPLATE = "unknown ({})"


def unknown_type(name: object) -> str:
    """Sentinel used when a primitive name has no row in the tables."""
    return UNKNOWN_TEMPLATE.format(name)


def is_unknown(value: str) -> bool:
    return value.startswith("unknown (") and value.endswith(")")


# =============================================================================
# Primitive Types
# =============================================================================

# DTDL schema -> SDF data qualities (total over the DTDL primitive schemas)
DTDL_SCHEMA_TO_SDF_TYPE: Dict[str, PrimitiveType] = {
    "boolean": PrimitiveType("boolean"),
    # Numbers ("number" covers float and double in SDF)
    "double": PrimitiveType("number"),
    "float": PrimitiveType("number"),
    "decimal": PrimitiveType("number"),
    # Integers
    "integer": PrimitiveType("integer"),
    "long": PrimitiveType("integer"),
    "short": PrimitiveType("integer"),
    "byte": PrimitiveType("integer"),
    "unsignedInteger": PrimitiveType("integer"),
    "unsignedLong": PrimitiveType("integer"),
    "unsignedShort": PrimitiveType("integer"),
    "unsignedByte": PrimitiveType("integer"),
    # Strings
    "string": PrimitiveType("string"),
    "uuid": PrimitiveType("string", format="uuid"),
    "bytes": PrimitiveType("string", sdf_type="byte-string"),
    # Date/Time
    "dateTime": PrimitiveType("string", format="date-time"),
    "date": PrimitiveType("string", format="date"),
    "time": PrimitiveType("string", format="time"),
    "duration": PrimitiveType("string", format="duration"),
}

# SDF type -> DTDL schema
SDF_TYPE_TO_DTDL_SCHEMA: Dict[str, str] = {
    "boolean": "boolean",
    "number": "double",
    "integer": "integer",
    "string": "string",
}

# SDF string format -> DTDL schema; unknown formats fall back to plain string
SDF_FORMAT_TO_DTDL_SCHEMA: Dict[str, str] = {
    "date-time": "dateTime",
    "date": "date",
    "time": "time",
    "duration": "duration",
    "uuid": "uuid",
}

# SDF semantic sub-type -> DTDL schema. unix-time has no DTDL schema and
# is read as its plain base type.
SDF_SUBTYPE_TO_DTDL_SCHEMA: Dict[str, str] = {
    "byte-string": "bytes",
}


def dtdl_schema_to_sdf(schema: str) -> PrimitiveType:
    """
    Map a DTDL primitive schema name to SDF data qualities.

    Unmapped names (including DTMI references to reusable schemas) come
    back as a string type carrying the ``unknown (<name>)`` sentinel.
    """
    mapped = DTDL_SCHEMA_TO_SDF_TYPE.get(schema)
    if mapped is None:
        logger.debug(f"No SDF type for DTDL schema '{schema}'")
        return PrimitiveType(unknown_type(schema))
    return PrimitiveType(mapped.type, mapped.format, mapped.sdf_type)


def sdf_type_to_dtdl(primitive: PrimitiveType) -> str:
    """Map SDF data qualities to a DTDL primitive schema name."""
    if primitive.sdf_type:
        schema = SDF_SUBTYPE_TO_DTDL_SCHEMA.get(primitive.sdf_type)
        if schema:
            return schema
        logger.debug(f"No DTDL schema for sdfType '{primitive.sdf_type}'")
    if primitive.format:
        schema = SDF_FORMAT_TO_DTDL_SCHEMA.get(primitive.format)
        if schema is None:
            logger.debug(f"SDF format '{primitive.format}' has no DTDL schema, using string")
            return "string"
        return schema
    schema = SDF_TYPE_TO_DTDL_SCHEMA.get(primitive.type)
    if schema is None:
        logger.debug(f"No DTDL schema for SDF type '{primitive.type}'")
        return unknown_type(primitive.type)
    return schema


# =============================================================================
# Units
# =============================================================================

@dataclass(frozen=True)
class UnitEntry:
    """DTDL counterpart of one SenML unit symbol."""
    dtdl_unit: str
    semantic_type: Optional[str] = None


# SenML unit symbol -> DTDL unit (and semantic type, where DTDL has one)
UNIT_TABLE: Dict[str, UnitEntry] = {
    # Temperature
    "Cel": UnitEntry("degreeCelsius", "Temperature"),
    "K": UnitEntry("kelvin", "Temperature"),
    "degF": UnitEntry("degreeFahrenheit", "Temperature"),
    # Ratios
    "%": UnitEntry("percent"),
    "%RH": UnitEntry("percent", "RelativeHumidity"),
    # Length
    "m": UnitEntry("metre", "Length"),
    "km": UnitEntry("kilometre", "Length"),
    "cm": UnitEntry("centimetre", "Length"),
    "mm": UnitEntry("millimetre", "Length"),
    # Time
    "s": UnitEntry("second", "TimeSpan"),
    "ms": UnitEntry("millisecond", "TimeSpan"),
    "min": UnitEntry("minute", "TimeSpan"),
    "h": UnitEntry("hour", "TimeSpan"),
    "d": UnitEntry("day", "TimeSpan"),
    # Pressure
    "Pa": UnitEntry("pascal", "Pressure"),
    "kPa": UnitEntry("kilopascal", "Pressure"),
    "bar": UnitEntry("bar", "Pressure"),
    # Electricity
    "V": UnitEntry("volt", "Voltage"),
    "mV": UnitEntry("millivolt", "Voltage"),
    "A": UnitEntry("ampere", "Current"),
    "mA": UnitEntry("milliampere", "Current"),
    "Ohm": UnitEntry("ohm", "Resistance"),
    "F": UnitEntry("farad", "Capacitance"),
    "C": UnitEntry("coulomb", "ElectricCharge"),
    # Power and energy
    "W": UnitEntry("watt", "Power"),
    "kW": UnitEntry("kilowatt", "Power"),
    "J": UnitEntry("joule", "Energy"),
    "kWh": UnitEntry("kilowattHour", "Energy"),
    # Mechanics
    "kg": UnitEntry("kilogram", "Mass"),
    "g": UnitEntry("gram", "Mass"),
    "N": UnitEntry("newton", "Force"),
    "m/s": UnitEntry("metrePerSecond", "Velocity"),
    "km/h": UnitEntry("kilometrePerHour", "Velocity"),
    "m/s2": UnitEntry("metrePerSecondSquared", "Acceleration"),
    "rad": UnitEntry("radian", "Angle"),
    "rad/s": UnitEntry("radianPerSecond", "AngularVelocity"),
    "rpm": UnitEntry("revolutionPerMinute", "AngularVelocity"),
    "m2": UnitEntry("squareMetre", "Area"),
    "m3": UnitEntry("cubicMetre", "Volume"),
    "l": UnitEntry("litre", "Volume"),
    "m3/s": UnitEntry("cubicMetrePerSecond", "VolumeFlowRate"),
    "l/s": UnitEntry("litrePerSecond", "VolumeFlowRate"),
    "kg/m3": UnitEntry("kilogramPerCubicMetre", "Density"),
    # Light, sound, signals
    "lx": UnitEntry("lux", "Illuminance"),
    "lm": UnitEntry("lumen", "LuminousFlux"),
    "cd": UnitEntry("candela", "LuminousIntensity"),
    "dB": UnitEntry("decibel", "SoundPressure"),
    "Hz": UnitEntry("hertz", "Frequency"),
    "T": UnitEntry("tesla", "MagneticInduction"),
    "Wb": UnitEntry("weber", "MagneticFlux"),
    "H": UnitEntry("henry", "Inductance"),
    # Data
    "B": UnitEntry("byte", "DataSize"),
    "bit/s": UnitEntry("bitPerSecond", "DataRate"),
    # Geography
    "lat": UnitEntry("degreeOfArc", "Latitude"),
    "lon": UnitEntry("degreeOfArc", "Longitude"),
}


def _build_reverse_indexes() -> Tuple[Dict[Tuple[Optional[str], str], str], Dict[str, str]]:
    by_pair: Dict[Tuple[Optional[str], str], str] = {}
    by_unit: Dict[str, str] = {}
    for symbol, entry in UNIT_TABLE.items():
        by_pair.setdefault((entry.semantic_type, entry.dtdl_unit), symbol)
        by_unit.setdefault(entry.dtdl_unit, symbol)
    return by_pair, by_unit


_DTDL_UNIT_BY_PAIR, _DTDL_UNIT_BY_NAME = _build_reverse_indexes()


def sdf_unit_to_dtdl(symbol: Optional[str]) -> Optional[UnitEntry]:
    """Look up a SenML unit symbol; None when absent or unmapped."""
    if not symbol:
        return None
    entry = UNIT_TABLE.get(symbol)
    if entry is None:
        logger.debug(f"No DTDL unit for SDF unit '{symbol}', omitting it")
    return entry


def dtdl_unit_to_sdf(unit: Optional[str], semantic_type: Optional[str] = None) -> Optional[str]:
    """
    Look up the SenML symbol for a DTDL unit.

    The semantic type disambiguates units shared by several qualities
    (``percent`` is ``%`` in general but ``%RH`` for RelativeHumidity).
    """
    if not unit:
        return None
    symbol = _DTDL_UNIT_BY_PAIR.get((semantic_type, unit)) or _DTDL_UNIT_BY_NAME.get(unit)
    if symbol is None:
        logger.debug(f"No SDF unit for DTDL unit '{unit}' ({semantic_type}), omitting it")
    return symbol
