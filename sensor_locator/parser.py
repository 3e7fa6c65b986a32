"""
Stage 1: CSV line source.

Streams the cells of every telemetry row that passes the line filters:
  - the line contains the event marker (default "Event-A")
  - wall-clock cells with a decimal comma are removed before splitting
  - the row has at least ``min_columns`` cells

Filtered lines are counted in the metadata, never raised.
"""

import csv
import logging
import os
from typing import Dict, Iterator, List, Optional, Tuple

from .constants import CLOCK_TIME_PATTERN, DEFAULT_ENCODING, DEFAULT_EVENT_MARKER

logger = logging.getLogger("sensor_locator.parser")


def split_line(line: str) -> List[str]:
    """Split one CSV line into cells, honouring double quotes."""
    for row in csv.reader([line]):
        return row
    return []


def read_header(path: str, encoding: str = DEFAULT_ENCODING) -> List[str]:
    """Return the cells of the first line of *path*."""
    with open(path, "r", encoding=encoding, errors="replace", newline="") as f:
        line = f.readline().rstrip("\r\n")
    if not line:
        raise ValueError(f"{path}: file is empty, no header found")
    return split_line(line)


class CsvRowSource:
    """
    Reads telemetry rows from a ground segment CSV export.

    Handles:
    - Header line (skipped as data and counted when has_header is set)
    - Event marker filtering
    - Clock-time cells with embedded commas
    - Short rows (skip with count)
    - Streaming via generator (O(1) memory)
    """

    def __init__(
        self,
        path: str,
        *,
        event_marker: str = DEFAULT_EVENT_MARKER,
        min_columns: int = 0,
        strip_clock_times: bool = True,
        encoding: str = DEFAULT_ENCODING,
        has_header: bool = True,
    ):
        self.path = path
        self.event_marker = event_marker
        self.min_columns = min_columns
        self.strip_clock_times = strip_clock_times
        self.encoding = encoding
        self.has_header = has_header
        self._metadata: Dict = {
            "source_type": "csv",
            "path": path,
            "total_lines": 0,
            "header_lines": 0,
            "marker_filtered": 0,
            "empty_lines": 0,
            "short_rows": 0,
            "selected_rows": 0,
        }

    def header(self) -> List[str]:
        return read_header(self.path, self.encoding)

    def rows(self) -> Iterator[Tuple[int, List[str]]]:
        """Generator of (line_number, cells) for rows passing every filter."""
        with open(self.path, "r", encoding=self.encoding, errors="replace", newline="") as f:
            for line_num, line in enumerate(f, start=1):
                self._metadata["total_lines"] += 1
                if line_num == 1 and self.has_header:
                    self._metadata["header_lines"] += 1
                    continue
                line = line.rstrip("\r\n")

                if self.strip_clock_times:
                    line = CLOCK_TIME_PATTERN.sub("", line)

                if self.event_marker and self.event_marker not in line:
                    self._metadata["marker_filtered"] += 1
                    logger.debug("No %s data, skipping line %d", self.event_marker, line_num)
                    continue

                cells = split_line(line)
                if not cells:
                    self._metadata["empty_lines"] += 1
                    logger.debug("Empty line %d, skipping", line_num)
                    continue

                if len(cells) < self.min_columns:
                    self._metadata["short_rows"] += 1
                    logger.debug(
                        "Wrong line %d, fields = %d < required = %d, skipping",
                        line_num, len(cells), self.min_columns,
                    )
                    continue

                self._metadata["selected_rows"] += 1
                yield line_num, cells

    def get_metadata(self) -> dict:
        return dict(self._metadata)


def open_row_source(path: str, **kwargs) -> CsvRowSource:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"input file not found: {path}")
    return CsvRowSource(path, **kwargs)
