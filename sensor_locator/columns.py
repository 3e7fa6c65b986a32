"""
ColumnResolver: locates the time, sensor id, length and data columns.

Two strategies exist and are never mixed:
  - fixed offsets (the ground segment export, columns 38/43/44/45)
  - header names, where length and data are assumed to sit right after the
    sensor id column (+1 / +2)
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .constants import (
    COLUMN_NAMES,
    DATA_OFFSET_FROM_SENSOR_ID,
    LENGTH_OFFSET_FROM_SENSOR_ID,
    SENSOR_ID_HEADER,
    TIME_HEADER,
)
from .errors import ColumnNotFound

logger = logging.getLogger("sensor_locator.columns")


@dataclass(frozen=True)
class ColumnIndexMap:
    """Offsets of the four selected cells; None marks an unresolved column."""
    time: Optional[int]
    sensor_id: Optional[int]
    length: Optional[int]
    data: Optional[int]
    derived: bool = False           # length/data computed from sensor_id

    def __post_init__(self):
        for name, offset in self.items():
            if offset is not None and offset < 0:
                raise ValueError(f"column offset for {name!r} must be >= 0, got {offset}")
        if self.derived and self.sensor_id is not None:
            if (self.length != self.sensor_id + LENGTH_OFFSET_FROM_SENSOR_ID
                    or self.data != self.sensor_id + DATA_OFFSET_FROM_SENSOR_ID):
                raise ValueError("derived length/data offsets must follow sensor_id")

    def items(self) -> List[Tuple[str, Optional[int]]]:
        return list(zip(COLUMN_NAMES, (self.time, self.sensor_id, self.length, self.data)))

    def as_dict(self) -> Dict[str, Optional[int]]:
        return dict(self.items())

    @property
    def is_complete(self) -> bool:
        return all(offset is not None for _, offset in self.items())

    def missing(self) -> List[str]:
        return [name for name, offset in self.items() if offset is None]

    @property
    def required_columns(self) -> int:
        """Smallest cell count a row needs for every offset to exist."""
        offsets = [o for _, o in self.items() if o is not None]
        return max(offsets) + 1 if offsets else 0

    def select(self, cells: Sequence[str]) -> Tuple[str, str, str, str]:
        """Pick (time, sensor_id, length, data) from a row of cells."""
        if not self.is_complete:
            raise ColumnNotFound(f"unresolved columns: {', '.join(self.missing())}")
        return (
            cells[self.time],
            cells[self.sensor_id],
            cells[self.length],
            cells[self.data],
        )


def _index_of(header: Sequence[str], name: str) -> int:
    """Exact match first, then the name wrapped in double quotes."""
    for candidate in (name, f'"{name}"'):
        try:
            return list(header).index(candidate)
        except ValueError:
            continue
    return -1


def resolve_columns(
    header: Sequence[str],
    names: Sequence[str],
    require_all: bool = False,
) -> Dict[str, int]:
    """
    Map each of *names* to its offset in *header*.

    Missing names are left out of the result, or raise ColumnNotFound when
    *require_all* is set.
    """
    indexes: Dict[str, int] = {}
    for name in names:
        index = _index_of(header, name)
        if index < 0:
            if require_all:
                raise ColumnNotFound(f"header does not contain the column {name!r}", column=name)
            logger.warning("Header does not contain the column %r", name)
            continue
        indexes[name] = index
    return indexes


class ColumnResolver:

    @staticmethod
    def from_header(
        header: Sequence[str],
        *,
        time_name: str = TIME_HEADER,
        sensor_id_name: str = SENSOR_ID_HEADER,
        require_all: bool = False,
    ) -> ColumnIndexMap:
        """
        Resolve offsets from a header row.

        Length and data are *not* looked up by name; they are taken to be the
        two columns after sensor id. Without *require_all*, a missing name
        yields a partial map (see ColumnIndexMap.is_complete).
        """
        if not header:
            raise ColumnNotFound("header row is empty")

        found = resolve_columns(header, [time_name, sensor_id_name], require_all)
        sensor_id = found.get(sensor_id_name)
        return ColumnIndexMap(
            time=found.get(time_name),
            sensor_id=sensor_id,
            length=None if sensor_id is None else sensor_id + LENGTH_OFFSET_FROM_SENSOR_ID,
            data=None if sensor_id is None else sensor_id + DATA_OFFSET_FROM_SENSOR_ID,
            derived=True,
        )

    @staticmethod
    def from_offsets(offsets: Sequence[int]) -> ColumnIndexMap:
        if len(offsets) != len(COLUMN_NAMES):
            raise ValueError(
                f"expected {len(COLUMN_NAMES)} column offsets "
                f"({', '.join(COLUMN_NAMES)}), got {len(offsets)}"
            )
        time, sensor_id, length, data = (int(o) for o in offsets)
        return ColumnIndexMap(time=time, sensor_id=sensor_id, length=length, data=data)
