"""
HexDecoder: turns the exported hex dump cell into payload bytes and text.

The cell looks like ``"50:31:32:33:2c:34:35:36"``; separators are dropped,
pairs are read left to right and only the declared number of bytes is kept.
"""

import logging

from .constants import HEX_SEPARATORS, PAYLOAD_TEXT_ENCODING
from .errors import InvalidLength, MalformedHex

logger = logging.getLogger("sensor_locator.hexcodec")

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class HexDecoder:

    def __init__(self, separators=HEX_SEPARATORS):
        self.separators = tuple(separators)

    def strip(self, hex_string: str) -> str:
        for sep in self.separators:
            hex_string = hex_string.replace(sep, "")
        return hex_string

    def decode(self, hex_string: str, declared_length: int) -> bytes:
        """
        Decode *declared_length* bytes from *hex_string*.

        Raises:
            MalformedHex: odd digit count or a non-hex character
            InvalidLength: declared_length <= 0, or fewer pairs than declared

        Surplus pairs past declared_length are ignored.
        """
        digits = self.strip(hex_string)
        if len(digits) % 2 != 0:
            raise MalformedHex(
                f"hex string length must be even, current = {len(digits)}"
            )
        if declared_length <= 0:
            raise InvalidLength(
                f"declared length = {declared_length}, must be bigger than 0"
            )
        available = len(digits) // 2
        if available < declared_length:
            raise InvalidLength(
                f"not enough bytes to read = {available}, required = {declared_length}"
            )

        wanted = digits[: declared_length * 2]
        bad = [c for c in wanted if c not in _HEX_DIGITS]
        if bad:
            raise MalformedHex(f"invalid hex digit {bad[0]!r}")

        if available > declared_length:
            logger.debug(
                "Ignoring %d surplus byte(s) past declared length %d",
                available - declared_length, declared_length,
            )
        return bytes.fromhex(wanted)

    @staticmethod
    def to_text(data: bytes) -> str:
        """Map each byte to the code point of the same value."""
        return data.decode(PAYLOAD_TEXT_ENCODING)

    def decode_text(self, hex_string: str, declared_length: int) -> str:
        return self.to_text(self.decode(hex_string, declared_length))
