"""
FieldTypeCatalog: immutable table of type code -> (name, unit labels).

Built once from FIELD_TYPES and shared by reference with every decoder.
"""

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from .constants import FIELD_TYPES
from .errors import UnknownFieldType
from .models import FieldTypeSpec


class FieldTypeCatalog:

    def __init__(self, table: Mapping[str, Tuple[str, Tuple[str, ...]]]):
        specs: Dict[str, FieldTypeSpec] = {
            code: FieldTypeSpec(code=code, name=name, units=tuple(units))
            for code, (name, units) in table.items()
        }
        self._specs = MappingProxyType(specs)

    @classmethod
    def default(cls) -> "FieldTypeCatalog":
        return cls(FIELD_TYPES)

    def lookup(self, code: str) -> FieldTypeSpec:
        """
        Return the FieldTypeSpec for *code*.

        Codes with no unit labels (the ``__unknown`` placeholder) can never be
        decoded numerically and are rejected like absent codes.
        """
        spec = self._specs.get(code)
        if spec is None or spec.arity == 0:
            raise UnknownFieldType(code)
        return spec

    def name_for(self, code: str, default: Optional[str] = None) -> Optional[str]:
        spec = self._specs.get(code)
        return spec.name if spec is not None else default

    def codes(self) -> Tuple[str, ...]:
        """Decodable codes, in table order."""
        return tuple(c for c, s in self._specs.items() if s.arity > 0)

    def __contains__(self, code: object) -> bool:
        spec = self._specs.get(code)  # type: ignore[arg-type]
        return spec is not None and spec.arity > 0

    def __iter__(self) -> Iterator[FieldTypeSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)


DEFAULT_CATALOG = FieldTypeCatalog.default()
