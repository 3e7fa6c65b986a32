"""
Configuration constants for the sensor locator.

Type codes and unit labels describe the payload convention used by the
HumSAT sensor firmware:

    [colon/quote separated hex pairs] -> ASCII text
    -> ';'-separated field tokens -> <1-char type code><comma-separated values>

The catalog table below is the single source of truth for arity: a decoded
field must carry exactly one numeric value per unit label.
"""

import re
from typing import Dict, List, Tuple

# ---------------------------------------------------------------------------
# Field type codes
# ---------------------------------------------------------------------------

UNKNOWN_CODE = "__unknown"
POSITION_CODE = "P"
RIVER_VOLUME_CODE = "L"
RIVER_LEVEL_CODE = "F"
RIVER_PH_CODE = "H"
RIVER_O2_CODE = "O"
STREAM_CODE = "C"
SEA_SALINITY_CODE = "S"
SWELL_CODE = "V"
TEMPERATURE_CODE = "T"
HUMIDITY_CODE = "U"
WIND_CODE = "W"
RAIN_CODE = "R"

# Position values are (latitude, longitude), both in degrees.
LATITUDE_INDEX = 0
LONGITUDE_INDEX = 1
POSITION_UNITS = "degrees"

# code -> (display name, unit labels). Unit count is the field's arity.
FIELD_TYPES: Dict[str, Tuple[str, Tuple[str, ...]]] = {
    UNKNOWN_CODE:      ("Unknown data",       ()),
    POSITION_CODE:     ("Position",           (POSITION_UNITS, POSITION_UNITS)),
    RIVER_VOLUME_CODE: ("River volume",       ("m^3/s",)),
    RIVER_LEVEL_CODE:  ("River level",        ("meters",)),
    RIVER_PH_CODE:     ("River PH",           ("u.pH",)),
    RIVER_O2_CODE:     ("River Oxigen",       ("mg/L",)),
    STREAM_CODE:       ("Stream",             ("cm/s", "degrees")),
    SEA_SALINITY_CODE: ("Sea salinity",       ("psu",)),
    SWELL_CODE:        ("Swell",              ("m", "degrees")),
    TEMPERATURE_CODE:  ("Temperature",        ("centigrades",)),
    HUMIDITY_CODE:     ("Relative Humidity",  ("%",)),
    WIND_CODE:         ("Wind",               ("m/s", "degrees")),
    RAIN_CODE:         ("Rain",               ("l/m^2",)),
}

# ---------------------------------------------------------------------------
# Payload encoding
# ---------------------------------------------------------------------------

FIELD_SEPARATOR = ";"
VALUE_SEPARATOR = ","
HEX_SEPARATORS = (":", '"')
MIN_TOKEN_CHARS = 2                 # 1 type code char + at least 1 value char

# Bytes are mapped 1:1 to code points; UTF-8 would mangle values >= 0x80.
PAYLOAD_TEXT_ENCODING = "latin-1"

# ---------------------------------------------------------------------------
# CSV layout
# ---------------------------------------------------------------------------

COLUMN_NAMES: List[str] = ["time", "sensor_id", "length", "data"]

# Fixed-offset layout of the ground segment export.
DEFAULT_COLUMN_OFFSETS: Tuple[int, int, int, int] = (38, 43, 44, 45)
DEFAULT_REQUIRED_COLUMNS = 46

# Header-based layout: length and data follow the sensor id column.
TIME_HEADER = "HUMPL Time"
SENSOR_ID_HEADER = "Sensor ID"
LENGTH_OFFSET_FROM_SENSOR_ID = 1
DATA_OFFSET_FROM_SENSOR_ID = 2

DEFAULT_EVENT_MARKER = "Event-A"
DEFAULT_ENCODING = "utf-8"

# Wall-clock cells such as 12:04:33,17 carry a decimal comma that would split
# into two columns. Never matches inside a colon-separated hex dump.
CLOCK_TIME_PATTERN = re.compile(r"(?<![0-9A-Fa-f:])\d{2}:\d{2}:\d{2},\d{2}(?!\d)")

INTERMEDIATE_FILE_EXTENSION = ".int"

# ---------------------------------------------------------------------------
# KML output
# ---------------------------------------------------------------------------

KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
DEFAULT_DOCUMENT_NAME = "HumSAT-D sensors"
PLACEMARK_STYLE_ID = "redIcon"
DEFAULT_ICON_COLOR = "990000ff"
DEFAULT_ICON_HREF = (
    "http://www.clker.com/cliparts/O/5/U/b/h/Q/radio-waves-3-hpg-hi.png"
)
