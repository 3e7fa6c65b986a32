"""
Run reports.

Produces two optional outputs next to the KML document:
  1. <input>.int: one line per accepted record (timestamp,id,length,[fields])
  2. a JSON report: row counts, skip reasons, and per-measurement statistics
"""

from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .catalog import DEFAULT_CATALOG, FieldTypeCatalog
from .models import GeoNode, LocatorReport, SkippedRow, TelemetryRecord


# ---------------------------------------------------------------------------
# Intermediate listing
# ---------------------------------------------------------------------------

def generate_intermediate_lines(records: Iterable[TelemetryRecord]) -> List[str]:
    return [r.to_line() for r in records]


# ---------------------------------------------------------------------------
# Measurement statistics
# ---------------------------------------------------------------------------

def _stats(values: List[float]) -> dict:
    arr = np.asarray(values, dtype=float)
    return {
        "count": int(arr.size),
        "mean": round(float(np.mean(arr)), 6),
        "min": round(float(np.min(arr)), 6),
        "max": round(float(np.max(arr)), 6),
        "std": round(float(np.std(arr)), 6),
    }


def summarize_measurements(
    records: Iterable[TelemetryRecord],
    catalog: FieldTypeCatalog = DEFAULT_CATALOG,
) -> Dict[str, dict]:
    """
    Group every decoded value by type code and value slot.

    Returns:
        {code: {"name": ..., "fields": n, "values": [{"unit": ..., "count": ...,
        "mean": ..., "min": ..., "max": ..., "std": ...}, ...]}}
    """
    slots: Dict[str, Dict[int, List[float]]] = defaultdict(lambda: defaultdict(list))
    units: Dict[str, Tuple[str, ...]] = {}
    field_counts: Counter = Counter()

    for record in records:
        for f in record.fields:
            field_counts[f.code] += 1
            units[f.code] = f.units
            for i, value in enumerate(f.values):
                slots[f.code][i].append(value)

    summary: Dict[str, dict] = {}
    for code in sorted(slots):
        summary[code] = {
            "name": catalog.name_for(code, default=code),
            "fields": field_counts[code],
            "values": [
                {"unit": units[code][i], **_stats(slots[code][i])}
                for i in sorted(slots[code])
            ],
        }
    return summary


def bounding_box(nodes: List[GeoNode]) -> Optional[dict]:
    if not nodes:
        return None
    lat = np.array([n.latitude for n in nodes], dtype=float)
    lon = np.array([n.longitude for n in nodes], dtype=float)
    return {
        "north": float(lat.max()),
        "south": float(lat.min()),
        "east": float(lon.max()),
        "west": float(lon.min()),
    }


# ---------------------------------------------------------------------------
# JSON report
# ---------------------------------------------------------------------------

def _kind_counts(rows: Iterable[SkippedRow]) -> Dict[str, int]:
    return dict(Counter(r.kind.value for r in rows))


def generate_json_report(report: LocatorReport, max_details: int = 100) -> dict:
    """Generate the structured JSON report for one run."""
    return {
        "metadata": report.metadata,
        "skipped_rows": {
            "total": len(report.skipped_rows),
            "by_kind": _kind_counts(report.skipped_rows),
            "details": [r.to_dict() for r in report.skipped_rows[:max_details]],
        },
        "dropped_nodes": {
            "total": len(report.dropped_nodes),
            "by_kind": _kind_counts(report.dropped_nodes),
        },
        "measurements": summarize_measurements(report.records),
        "bounding_box": bounding_box(report.nodes),
        "sensors": sorted({r.sensor_id for r in report.records}),
    }
