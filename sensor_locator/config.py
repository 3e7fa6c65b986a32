"""
Run configuration: defaults, optional YAML file, CLI overrides.

Example locator.yaml:

    column_mode: header
    require_all_columns: true
    event_marker: Event-A
"""

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import yaml

from .constants import (
    DEFAULT_COLUMN_OFFSETS,
    DEFAULT_DOCUMENT_NAME,
    DEFAULT_ENCODING,
    DEFAULT_EVENT_MARKER,
    DEFAULT_ICON_COLOR,
    DEFAULT_ICON_HREF,
    DEFAULT_REQUIRED_COLUMNS,
    SENSOR_ID_HEADER,
    TIME_HEADER,
)

COLUMN_MODES = ("fixed", "header")


@dataclass(frozen=True)
class LocatorConfig:
    column_mode: str = "fixed"
    column_offsets: Tuple[int, int, int, int] = DEFAULT_COLUMN_OFFSETS
    required_columns: int = DEFAULT_REQUIRED_COLUMNS
    time_header: str = TIME_HEADER
    sensor_id_header: str = SENSOR_ID_HEADER
    require_all_columns: bool = False
    event_marker: str = DEFAULT_EVENT_MARKER
    strip_clock_times: bool = True
    encoding: str = DEFAULT_ENCODING
    document_name: str = DEFAULT_DOCUMENT_NAME
    icon_href: str = DEFAULT_ICON_HREF
    icon_color: str = DEFAULT_ICON_COLOR

    def __post_init__(self):
        if self.column_mode not in COLUMN_MODES:
            raise ValueError(
                f"column_mode must be one of {COLUMN_MODES}, got {self.column_mode!r}"
            )
        offsets = tuple(self.column_offsets)
        if len(offsets) != 4 or not all(isinstance(o, int) and o >= 0 for o in offsets):
            raise ValueError(
                f"column_offsets must be four non-negative integers, got {self.column_offsets!r}"
            )
        object.__setattr__(self, "column_offsets", offsets)
        if self.required_columns < 1:
            raise ValueError(f"required_columns must be positive, got {self.required_columns}")

    def with_overrides(self, **overrides: Any) -> "LocatorConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)


_FIELD_TYPES: Dict[str, type] = {
    "column_mode": str,
    "column_offsets": list,
    "required_columns": int,
    "time_header": str,
    "sensor_id_header": str,
    "require_all_columns": bool,
    "event_marker": str,
    "strip_clock_times": bool,
    "encoding": str,
    "document_name": str,
    "icon_href": str,
    "icon_color": str,
}


def config_from_dict(data: Dict[str, Any]) -> LocatorConfig:
    values: Dict[str, Any] = {}
    for key, value in data.items():
        expected = _FIELD_TYPES.get(key)
        if expected is None:
            raise ValueError(f"unknown configuration key {key!r}")
        # bool is an int subclass; keep them apart
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ValueError(
                f"configuration key {key!r} must be {expected.__name__}, "
                f"got {type(value).__name__}"
            )
        values[key] = tuple(value) if key == "column_offsets" else value
    return LocatorConfig(**values)


def load_config(yaml_path: Optional[str] = None) -> LocatorConfig:
    """
    Load a LocatorConfig from YAML. No path means defaults.

    Raises:
        OSError: the file does not exist
        ValueError: unknown keys, wrong types or a non-mapping document
    """
    if yaml_path is None:
        return LocatorConfig()

    if not os.path.exists(yaml_path):
        raise FileNotFoundError(f"configuration file not found: {yaml_path}")

    with open(yaml_path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        return LocatorConfig()
    if not isinstance(data, dict):
        raise ValueError(f"{yaml_path}: expected a mapping at top level")
    return config_from_dict(data)
