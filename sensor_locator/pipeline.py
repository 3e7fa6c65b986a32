"""
Pipeline orchestrator: wires the stages together.

read rows → resolve columns → decode records → build nodes → KML / listings / report

Per-row failures never abort a run: they are collected as SkippedRow
diagnostics. Only file-level problems (unreadable input, unresolvable
columns, bad configuration) are fatal.
"""

import json
import logging
import os
import time
from typing import Iterable, List, Optional, Sequence, Tuple

from .columns import ColumnIndexMap, ColumnResolver
from .config import LocatorConfig
from .errors import ColumnNotFound
from .geonodes import GeoNodeBuilder
from .kml_writer import KmlWriter
from .models import GeoNode, LocatorReport, SkippedRow, TelemetryRecord
from .parser import CsvRowSource, open_row_source
from .records import TelemetryRecordBuilder
from .report_generator import generate_intermediate_lines, generate_json_report

logger = logging.getLogger("sensor_locator.pipeline")


# ---------------------------------------------------------------------------
# Column resolution
# ---------------------------------------------------------------------------

def resolve_column_map(config: LocatorConfig, source: CsvRowSource) -> ColumnIndexMap:
    """
    Build the column map for one file and set the source's row threshold.

    Raises:
        ColumnNotFound: header mode could not resolve every column
    """
    if config.column_mode == "header":
        columns = ColumnResolver.from_header(
            source.header(),
            time_name=config.time_header,
            sensor_id_name=config.sensor_id_header,
            require_all=config.require_all_columns,
        )
        if not columns.is_complete:
            raise ColumnNotFound(
                f"{os.path.basename(source.path)}: unresolved columns "
                f"{', '.join(columns.missing())}"
            )
        source.min_columns = columns.required_columns
    else:
        columns = ColumnResolver.from_offsets(config.column_offsets)
        source.min_columns = max(config.required_columns, columns.required_columns)
    return columns


# ---------------------------------------------------------------------------
# Row loop
# ---------------------------------------------------------------------------

def _short_row_error(cells: Sequence[str], columns: ColumnIndexMap) -> ColumnNotFound:
    name, offset = next((n, o) for n, o in columns.items() if o >= len(cells))
    return ColumnNotFound(
        f"no {name} column at offset {offset}, row has {len(cells)} cells",
        column=name,
    )


def decode_rows(
    rows: Iterable[Tuple[int, Sequence[str]]],
    columns: ColumnIndexMap,
    builder: Optional[TelemetryRecordBuilder] = None,
) -> Tuple[List[Tuple[int, TelemetryRecord]], List[SkippedRow]]:
    """
    Decode every row, in file order.

    Returns:
        ([(line_number, record), ...], [SkippedRow, ...])
    """
    builder = builder or TelemetryRecordBuilder()
    decoded: List[Tuple[int, TelemetryRecord]] = []
    skipped: List[SkippedRow] = []

    for line_num, cells in rows:
        if len(cells) < columns.required_columns:
            error = _short_row_error(cells, columns)
            skipped.append(SkippedRow(line_num, error.kind, error.message, tuple(cells)))
            logger.warning("Skipping line %d: %s", line_num, error)
            continue

        selected = columns.select(cells)
        result = builder.try_build(*selected)
        if result.ok:
            decoded.append((line_num, result.value))
        else:
            skipped.append(SkippedRow(line_num, result.error.kind, result.error.message, selected))
            logger.warning("Wrong format, skipping line %d %s: %s", line_num, list(selected), result.error)

    return decoded, skipped


def build_nodes(
    decoded: Iterable[Tuple[int, TelemetryRecord]],
    builder: Optional[GeoNodeBuilder] = None,
) -> Tuple[List[GeoNode], List[SkippedRow]]:
    """Build one node per (line_number, record) that has a position; report the rest."""
    builder = builder or GeoNodeBuilder()
    nodes: List[GeoNode] = []
    dropped: List[SkippedRow] = []

    for line_num, record in decoded:
        result = builder.try_build(record)
        if result.ok:
            nodes.append(result.value)
        else:
            dropped.append(SkippedRow(line_num, result.error.kind, result.error.message, (record.to_line(),)))
            logger.warning("Could not create node for line %d %s: %s", line_num, record, result.error)

    return nodes, dropped


# ---------------------------------------------------------------------------
# Full run
# ---------------------------------------------------------------------------

def run_pipeline(
    input_path: str,
    output_path: str,
    *,
    config: Optional[LocatorConfig] = None,
    verbose: bool = False,
    intermediate_path: Optional[str] = None,
    report_path: Optional[str] = None,
) -> LocatorReport:
    """
    Decode one CSV export and write its KML document.

    Args:
        input_path: CSV export from the ground segment
        output_path: KML file to write (written even when no row decodes)
        config: run configuration (defaults when None)
        verbose: print stage progress
        intermediate_path: optional listing of accepted records, one per line
        report_path: optional JSON run report

    Returns:
        LocatorReport with records, nodes and skip diagnostics
    """
    config = config or LocatorConfig()

    def log(msg: str):
        if verbose:
            print(msg)

    t_start = time.time()

    # ======================================================================
    # Stage 1: Open input + resolve columns
    # ======================================================================
    log(f"\n--- Stage 1: Column Resolution ({config.column_mode}) ---")
    source = open_row_source(
        input_path,
        event_marker=config.event_marker,
        strip_clock_times=config.strip_clock_times,
        encoding=config.encoding,
        has_header=config.column_mode == "header",
    )
    columns = resolve_column_map(config, source)
    log(f"  Columns: {columns.as_dict()} (rows need >= {source.min_columns} cells)")

    # ======================================================================
    # Stage 2: Decode rows
    # ======================================================================
    log(f"\n--- Stage 2: Decode Rows ---")
    t0 = time.time()
    decoded, skipped = decode_rows(source.rows(), columns)
    records = [record for _, record in decoded]
    metadata = source.get_metadata()
    log(f"  Decoded {len(records)} records, skipped {len(skipped)} rows in {time.time()-t0:.2f}s")

    # ======================================================================
    # Stage 3: Build geolocated nodes
    # ======================================================================
    log(f"\n--- Stage 3: Geolocated Nodes ---")
    nodes, dropped = build_nodes(decoded)
    log(f"  Built {len(nodes)} nodes, {len(dropped)} records without a usable position")

    metadata.update({
        "source_file": os.path.basename(input_path),
        "column_mode": config.column_mode,
        "columns": columns.as_dict(),
        "required_columns": source.min_columns,
        "processed_rows": len(records),
        "skipped_rows": len(skipped),
        "nodes": len(nodes),
        "dropped_nodes": len(dropped),
    })
    report = LocatorReport(
        metadata=metadata,
        records=records,
        nodes=nodes,
        skipped_rows=skipped,
        dropped_nodes=dropped,
    )

    # ======================================================================
    # Stage 4: Outputs
    # ======================================================================
    log(f"\n--- Stage 4: Outputs ---")
    writer = KmlWriter(
        document_name=config.document_name,
        icon_href=config.icon_href,
        icon_color=config.icon_color,
    )
    writer.add_nodes(nodes)
    writer.write(output_path)
    log(f"  KML: {output_path}")

    if intermediate_path:
        with open(intermediate_path, "w") as f:
            for line in generate_intermediate_lines(records):
                f.write(line + "\n")
        log(f"  Listing: {intermediate_path}")

    if report_path:
        with open(report_path, "w") as f:
            json.dump(generate_json_report(report), f, indent=2, default=str)
        log(f"  JSON report: {report_path}")

    logger.info(
        "%s: %d rows decoded, %d skipped, %d nodes written to %s",
        metadata["source_file"], len(records), len(skipped), len(nodes), output_path,
    )
    log(f"\n=== Pipeline complete in {time.time() - t_start:.2f}s ===")
    return report
