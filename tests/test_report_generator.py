"""
Tests for report_generator.py.
"""

import pytest

from sensor_locator.errors import ErrorKind
from sensor_locator.fields import FieldDecoder
from sensor_locator.geonodes import GeoNodeBuilder
from sensor_locator.models import LocatorReport, SkippedRow, TelemetryRecord
from sensor_locator.report_generator import (
    bounding_box,
    generate_intermediate_lines,
    generate_json_report,
    summarize_measurements,
)


def record(payload, sensor_id=1, timestamp=0):
    return TelemetryRecord(
        timestamp=timestamp,
        sensor_id=sensor_id,
        length=len(payload),
        fields=FieldDecoder().decode_all(payload),
        payload=payload,
    )


@pytest.fixture
def records():
    return [
        record("P10,20;W2,90", sensor_id=3),
        record("P30,-40;W4,270", sensor_id=1),
        record("T15", sensor_id=3),
    ]


class TestSummaries:

    def test_intermediate_lines(self, records):
        lines = generate_intermediate_lines(records)
        assert lines[2] == "0,3,3,[Temperature = 15.0 (centigrades)]"

    def test_measurements(self, records):
        summary = summarize_measurements(records)
        assert list(summary) == ["P", "T", "W"]
        wind = summary["W"]
        assert wind["name"] == "Wind"
        assert wind["fields"] == 2
        speed, direction = wind["values"]
        assert speed["unit"] == "m/s"
        assert speed["mean"] == 3.0
        assert speed["std"] == 1.0
        assert direction["min"] == 90.0
        assert direction["max"] == 270.0
        assert summary["T"]["values"][0]["count"] == 1

    def test_bounding_box(self, records):
        builder = GeoNodeBuilder()
        nodes = [builder.build(r) for r in records[:2]]
        assert bounding_box(nodes) == {"north": 30.0, "south": 10.0, "east": 20.0, "west": -40.0}
        assert bounding_box([]) is None


class TestJsonReport:

    def test_structure(self, records):
        skipped = [
            SkippedRow(4, ErrorKind.MALFORMED_HEX, "odd", ("1", "2", "3", "abc")),
            SkippedRow(5, ErrorKind.MALFORMED_HEX, "odd"),
            SkippedRow(6, ErrorKind.MISSING_FIELD, "empty"),
        ]
        report = LocatorReport(
            metadata={"source_file": "x.csv"},
            records=records,
            nodes=[],
            skipped_rows=skipped,
            dropped_nodes=[SkippedRow(0, ErrorKind.NO_POSITION_FIELD, "none")],
        )
        data = generate_json_report(report, max_details=2)
        assert data["metadata"] == {"source_file": "x.csv"}
        assert data["skipped_rows"]["total"] == 3
        assert data["skipped_rows"]["by_kind"] == {"MalformedHex": 2, "MissingField": 1}
        assert len(data["skipped_rows"]["details"]) == 2
        assert data["skipped_rows"]["details"][0]["cells"] == ["1", "2", "3", "abc"]
        assert data["dropped_nodes"] == {"total": 1, "by_kind": {"NoPositionField": 1}}
        assert data["bounding_box"] is None
        assert data["sensors"] == [1, 3]
