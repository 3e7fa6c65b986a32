"""
GeoNodeBuilder: derives a map node from a record's position field.

The first field coded ``P`` (any case) supplies latitude/longitude; every
other non-position field becomes the node's information list.
"""

from typing import Tuple

from .constants import LATITUDE_INDEX, LONGITUDE_INDEX
from .errors import MalformedPosition, NoPositionField, TelemetryDecodeError
from .models import BuildResult, GeoNode, TelemetryField, TelemetryRecord


def node_name(record: TelemetryRecord) -> str:
    return f"SensorID = {record.sensor_id}, timestamp = {record.timestamp}"


def find_position(record: TelemetryRecord) -> TelemetryField:
    for f in record.fields:
        if f.is_position:
            return f
    raise NoPositionField(
        f"sensor {record.sensor_id} at {record.timestamp} has no position field"
    )


def information_fields(record: TelemetryRecord) -> Tuple[TelemetryField, ...]:
    return tuple(f for f in record.fields if not f.is_position)


class GeoNodeBuilder:

    def build(self, record: TelemetryRecord) -> GeoNode:
        """
        Raises:
            NoPositionField: the record carries no position field
            MalformedPosition: the position field has fewer than two values
        """
        position = find_position(record)
        values = position.values
        if len(values) <= max(LATITUDE_INDEX, LONGITUDE_INDEX):
            raise MalformedPosition(
                f"position field {position.raw!r} has {len(values)} value(s), "
                f"latitude and longitude required"
            )

        return GeoNode(
            name=node_name(record),
            latitude=values[LATITUDE_INDEX],
            longitude=values[LONGITUDE_INDEX],
            information=information_fields(record),
            source=record,
        )

    def try_build(self, record: TelemetryRecord) -> BuildResult[GeoNode]:
        try:
            return BuildResult(value=self.build(record))
        except TelemetryDecodeError as e:
            return BuildResult(error=e)
