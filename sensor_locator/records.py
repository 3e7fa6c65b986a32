"""
TelemetryRecordBuilder: turns the four selected CSV cells into a record.

    timestamp, sensor id, length -> int
    raw data -> HexDecoder (declared length) -> latin-1 text -> FieldDecoder
"""

import logging
import re
from typing import Optional

from .errors import MalformedInteger, MissingField, TelemetryDecodeError
from .fields import FieldDecoder
from .hexcodec import HexDecoder
from .models import BuildResult, TelemetryRecord

logger = logging.getLogger("sensor_locator.records")

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def _require(name: str, value: Optional[str]) -> str:
    if value is None or value == "":
        raise MissingField(name)
    return value


def parse_int(name: str, value: str) -> int:
    text = value.strip()
    if not _INTEGER_RE.match(text):
        raise MalformedInteger(name, value)
    return int(text)


class TelemetryRecordBuilder:
    """Stateless; one instance can serve every row of every file."""

    def __init__(
        self,
        field_decoder: Optional[FieldDecoder] = None,
        hex_decoder: Optional[HexDecoder] = None,
    ):
        self.field_decoder = field_decoder or FieldDecoder()
        self.hex_decoder = hex_decoder or HexDecoder()

    def build(
        self,
        timestamp: Optional[str],
        sensor_id: Optional[str],
        length: Optional[str],
        raw_data: Optional[str],
    ) -> TelemetryRecord:
        """
        Build one record. Any decode failure propagates with its own kind.

        Raises:
            MissingField, MalformedInteger, MalformedHex, InvalidLength,
            EmptyPayload, UnknownFieldType, MalformedValue, ArityMismatch
        """
        timestamp = _require("timestamp", timestamp)
        sensor_id = _require("sensorId", sensor_id)
        length = _require("dataLen", length)
        raw_data = _require("rawData", raw_data)

        ts = parse_int("timestamp", timestamp)
        sid = parse_int("sensorId", sensor_id)
        data_len = parse_int("dataLen", length)

        payload = self.hex_decoder.decode_text(raw_data, data_len)
        logger.debug("sensor %d payload = %r", sid, payload)
        fields = self.field_decoder.decode_all(payload)

        return TelemetryRecord(
            timestamp=ts,
            sensor_id=sid,
            length=data_len,
            fields=fields,
            payload=payload,
        )

    def try_build(self, timestamp, sensor_id, length, raw_data) -> BuildResult[TelemetryRecord]:
        """Like build(), but returns the error instead of raising it."""
        try:
            return BuildResult(value=self.build(timestamp, sensor_id, length, raw_data))
        except TelemetryDecodeError as e:
            return BuildResult(error=e)
