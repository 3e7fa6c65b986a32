"""
Shared fixtures for the sensor locator test suite.

Rows are built in the ground segment export layout: 46 cells, time at 38,
sensor id at 43, length at 44, hex data at 45, "Event-A" somewhere in the row.
"""

import pytest

from sensor_locator.constants import DEFAULT_COLUMN_OFFSETS, DEFAULT_REQUIRED_COLUMNS


def to_hex(text: str, sep: str = ":") -> str:
    return sep.join(f"{b:02x}" for b in text.encode("latin-1"))


def make_row(
    timestamp="1000",
    sensor_id="7",
    length=None,
    payload="P42.5,-8.25;T23.5",
    *,
    width=DEFAULT_REQUIRED_COLUMNS,
    offsets=DEFAULT_COLUMN_OFFSETS,
    marker="Event-A",
    data=None,
):
    """Return the cells of one export row carrying *payload*."""
    if data is None:
        data = to_hex(payload)
    if length is None:
        length = str(len(payload.encode("latin-1")))
    cells = [f"c{i}" for i in range(width)]
    cells[0] = marker
    t, s, l, d = offsets
    cells[t] = timestamp
    cells[s] = sensor_id
    cells[l] = length
    cells[d] = data
    return cells


def header_row(width=DEFAULT_REQUIRED_COLUMNS, offsets=DEFAULT_COLUMN_OFFSETS):
    cells = [f"Column {i}" for i in range(width)]
    t, s, l, d = offsets
    cells[t] = "HUMPL Time"
    cells[s] = "Sensor ID"
    cells[l] = "Length"
    cells[d] = "Data"
    return cells


@pytest.fixture
def write_csv(tmp_path):
    """Write a header plus rows (lists of cells or raw strings) to a CSV file."""

    def _write(rows, header=None, name="input.csv"):
        path = tmp_path / name
        lines = [",".join(header if header is not None else header_row())]
        for row in rows:
            lines.append(row if isinstance(row, str) else ",".join(row))
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)

    return _write
