"""
Data models for the sensor locator pipeline.

All stages communicate via these dataclasses. Decoded values are frozen:
a record owns its fields, and a GeoNode only points back at its record.
"""

from dataclasses import dataclass, field
from typing import Dict, Generic, List, Optional, Tuple, TypeVar

from .constants import POSITION_CODE
from .errors import ErrorKind, TelemetryDecodeError

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Catalog entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldTypeSpec:
    """Catalog entry for one type code."""
    code: str                       # one character, e.g. "P"
    name: str                       # human readable, e.g. "Position"
    units: Tuple[str, ...]          # one label per expected value

    @property
    def arity(self) -> int:
        return len(self.units)


# ---------------------------------------------------------------------------
# Decoded payload
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Measurement:
    unit: str
    value: float

    def render(self) -> str:
        return f"{self.value} ({self.unit})"


@dataclass(frozen=True)
class TelemetryField:
    """One decoded field token, e.g. ``T23.5`` -> Temperature 23.5 centigrades."""
    code: str
    raw: str                        # token as it appeared in the payload
    name: str                       # display name from the catalog
    measurements: Tuple[Measurement, ...]

    @property
    def values(self) -> Tuple[float, ...]:
        return tuple(m.value for m in self.measurements)

    @property
    def units(self) -> Tuple[str, ...]:
        return tuple(m.unit for m in self.measurements)

    @property
    def is_position(self) -> bool:
        return self.code.upper() == POSITION_CODE

    def render(self) -> str:
        """``"Wind = 3.2 (m/s), 270.0 (degrees)"``"""
        return f"{self.name} = " + ", ".join(m.render() for m in self.measurements)

    def __str__(self):
        return self.render()


@dataclass(frozen=True)
class TelemetryRecord:
    """One accepted CSV row."""
    timestamp: int                  # seconds or device ticks, as exported
    sensor_id: int
    length: int                     # declared payload length in bytes
    fields: Tuple[TelemetryField, ...]
    payload: str = ""               # decoded ASCII payload (for listings)

    def to_line(self) -> str:
        rendered = "; ".join(f.render() for f in self.fields)
        return f"{self.timestamp},{self.sensor_id},{self.length},[{rendered}]"

    def __str__(self):
        return self.to_line()


# ---------------------------------------------------------------------------
# Geolocated output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GeoNode:
    """Display-ready view of a record that carried a position field."""
    name: str
    latitude: float
    longitude: float
    information: Tuple[TelemetryField, ...]
    # Lookup only; equality and repr ignore the source record.
    source: Optional[TelemetryRecord] = field(default=None, compare=False, repr=False)

    @property
    def description(self) -> Tuple[str, ...]:
        return tuple(f.render() for f in self.information)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)

    @property
    def kml_coordinates(self) -> str:
        # KML orders coordinates longitude first.
        return f"{self.longitude},{self.latitude}"


# ---------------------------------------------------------------------------
# Row loop results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BuildResult(Generic[T]):
    """Either a built value or the error that prevented it."""
    value: Optional[T] = None
    error: Optional[TelemetryDecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SkippedRow:
    """Diagnostic for a row (or node) dropped by the pipeline."""
    line_number: int                # 1-indexed line in the input file, 0 if unknown
    kind: ErrorKind
    reason: str
    cells: Tuple[str, ...] = ()     # the selected cells, when available

    def to_dict(self) -> dict:
        return {
            "line_number": self.line_number,
            "kind": self.kind.value,
            "reason": self.reason,
            "cells": list(self.cells),
        }


@dataclass
class LocatorReport:
    """Complete output from one pipeline run."""
    metadata: Dict                  # source_file, row counts, column map
    records: List[TelemetryRecord]
    nodes: List[GeoNode]
    skipped_rows: List[SkippedRow]  # rows that did not decode
    dropped_nodes: List[SkippedRow] # records that could not become nodes
