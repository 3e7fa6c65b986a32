"""
Tests for geonodes.py: position extraction and information fields.
"""

import pytest

from sensor_locator.errors import ErrorKind, MalformedPosition, NoPositionField
from sensor_locator.fields import FieldDecoder
from sensor_locator.geonodes import GeoNodeBuilder
from sensor_locator.models import Measurement, TelemetryField, TelemetryRecord
from sensor_locator.records import TelemetryRecordBuilder


def record_of(payload, sensor_id=7, timestamp=1000):
    return TelemetryRecord(
        timestamp=timestamp,
        sensor_id=sensor_id,
        length=len(payload),
        fields=FieldDecoder().decode_all(payload),
        payload=payload,
    )


@pytest.fixture
def builder():
    return GeoNodeBuilder()


class TestBuild:

    def test_position_only(self, builder):
        record = TelemetryRecordBuilder().build("1000", "7", "8", "503132332c343536")
        node = builder.build(record)
        assert node.latitude == 123.0
        assert node.longitude == 456.0
        assert node.information == ()
        assert node.description == ()
        assert node.source is record

    def test_name(self, builder):
        node = builder.build(record_of("P1,2", sensor_id=12, timestamp=345))
        assert node.name == "SensorID = 12, timestamp = 345"

    def test_information_keeps_order(self, builder):
        node = builder.build(record_of("T23.5;P42.5,-8.25;W3.5,270;U80"))
        assert node.position == (42.5, -8.25)
        assert [f.code for f in node.information] == ["T", "W", "U"]
        assert node.description == (
            "Temperature = 23.5 (centigrades)",
            "Wind = 3.5 (m/s), 270.0 (degrees)",
            "Relative Humidity = 80.0 (%)",
        )

    def test_first_position_wins_and_duplicates_excluded(self, builder):
        node = builder.build(record_of("P1,2;T5;P3,4"))
        assert node.position == (1.0, 2.0)
        assert [f.code for f in node.information] == ["T"]

    def test_lower_case_position_code(self, builder):
        pos = TelemetryField(
            code="p", raw="p1,2", name="Position",
            measurements=(Measurement("degrees", 1.0), Measurement("degrees", 2.0)),
        )
        record = TelemetryRecord(timestamp=1, sensor_id=1, length=4, fields=(pos,))
        assert builder.build(record).position == (1.0, 2.0)

    def test_no_position(self, builder):
        with pytest.raises(NoPositionField):
            builder.build(record_of("T23.5;R0.4"))

    def test_malformed_position(self, builder):
        pos = TelemetryField(
            code="P", raw="P1", name="Position",
            measurements=(Measurement("degrees", 1.0),),
        )
        record = TelemetryRecord(timestamp=1, sensor_id=1, length=2, fields=(pos,))
        with pytest.raises(MalformedPosition):
            builder.build(record)

    def test_kml_coordinates_longitude_first(self, builder):
        node = builder.build(record_of("P42.5,-8.25"))
        assert node.kml_coordinates == "-8.25,42.5"

    def test_try_build(self, builder):
        result = builder.try_build(record_of("T1"))
        assert not result.ok
        assert result.error.kind is ErrorKind.NO_POSITION_FIELD
