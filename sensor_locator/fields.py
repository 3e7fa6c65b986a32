"""
FieldDecoder: splits a decoded payload into field tokens and decodes each.

A payload such as ``P42.1,-8.5;T23.5;W3.2,270`` yields three TelemetryFields.
Each token is one type code character followed by comma-separated decimal
values, whose count must match the catalog's unit labels for that code.
"""

import math
import re
from typing import List, Tuple

from .catalog import DEFAULT_CATALOG, FieldTypeCatalog
from .constants import FIELD_SEPARATOR, MIN_TOKEN_CHARS, VALUE_SEPARATOR
from .errors import ArityMismatch, EmptyPayload, MalformedValue
from .models import Measurement, TelemetryField

_DECIMAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def split_tokens(payload: str) -> List[str]:
    """
    Split *payload* on the field separator, dropping trailing empty tokens.

    ``"T1;"`` and ``"T1"`` both give ``["T1"]``; an empty token in the middle
    is kept so the decoder can reject it.
    """
    tokens = payload.split(FIELD_SEPARATOR)
    while tokens and tokens[-1] == "":
        tokens.pop()
    return tokens


def parse_values(code: str, text: str) -> Tuple[float, ...]:
    """Parse comma-separated decimals; nan, inf and underscore forms are rejected."""
    values = []
    for raw in text.split(VALUE_SEPARATOR):
        value = float(raw) if _DECIMAL_RE.match(raw.strip()) else None
        if value is None or not math.isfinite(value):
            raise MalformedValue(
                f"type {code!r}: value {raw!r} is not a number"
            )
        values.append(value)
    return tuple(values)


class FieldDecoder:

    def __init__(self, catalog: FieldTypeCatalog = DEFAULT_CATALOG):
        self.catalog = catalog

    def decode_one(self, token: str) -> TelemetryField:
        """
        Decode one ``<code><v1>,<v2>...`` token.

        Raises:
            MalformedValue: token shorter than 2 chars, or a non-numeric value
            UnknownFieldType: code not in the catalog
            ArityMismatch: value count differs from the code's unit count
        """
        if len(token) < MIN_TOKEN_CHARS:
            raise MalformedValue(
                f"field token {token!r} must be {MIN_TOKEN_CHARS} chars at least"
            )
        code, body = token[0], token[1:]
        spec = self.catalog.lookup(code)
        values = parse_values(code, body)
        if len(values) != spec.arity:
            raise ArityMismatch(code, expected=spec.arity, actual=len(values))

        return TelemetryField(
            code=code,
            raw=token,
            name=spec.name,
            measurements=tuple(
                Measurement(unit=unit, value=value)
                for unit, value in zip(spec.units, values)
            ),
        )

    def decode_all(self, payload: str) -> Tuple[TelemetryField, ...]:
        """Decode every token of *payload*; the first bad token fails the lot."""
        tokens = split_tokens(payload)
        if not tokens:
            raise EmptyPayload(
                f"no fields result from splitting payload {payload!r} "
                f"on {FIELD_SEPARATOR!r}"
            )
        return tuple(self.decode_one(t) for t in tokens)
