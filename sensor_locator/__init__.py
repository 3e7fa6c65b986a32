"""
Sensor Locator

Decodes the hex-encoded sensor payloads of HumSAT ground segment CSV exports
into typed, unit-annotated measurements and places every positioned report
on a KML map.
"""

__version__ = "0.1.0"

from .catalog import DEFAULT_CATALOG, FieldTypeCatalog
from .columns import ColumnIndexMap, ColumnResolver
from .fields import FieldDecoder
from .geonodes import GeoNodeBuilder
from .hexcodec import HexDecoder
from .models import GeoNode, TelemetryField, TelemetryRecord
from .records import TelemetryRecordBuilder
