"""
Tests for hexcodec.py: separator stripping, length rules, latin-1 text.
"""

import pytest

from sensor_locator.errors import ErrorKind, InvalidLength, MalformedHex
from sensor_locator.hexcodec import HexDecoder


@pytest.fixture
def decoder():
    return HexDecoder()


class TestDecode:

    def test_exact_length(self, decoder):
        assert decoder.decode("503132332c343536", 8) == b"P123,456"

    def test_colon_and_quote_separators(self, decoder):
        assert decoder.decode('"50:31:32:33:2c:34:35:36"', 8) == b"P123,456"

    def test_surplus_digits_ignored(self, decoder):
        assert decoder.decode("503132332c343536ffee", 8) == b"P123,456"
        assert decoder.decode("5031ab", 2) == b"P1"

    def test_returns_exactly_declared_length(self, decoder):
        for n in range(1, 9):
            out = decoder.decode("503132332c343536", n)
            assert len(out) == n
            assert out == bytes.fromhex("503132332c343536")[:n]

    def test_upper_case_digits(self, decoder):
        assert decoder.decode("4A4b", 2) == b"JK"

    def test_odd_length(self, decoder):
        with pytest.raises(MalformedHex) as exc:
            decoder.decode("ABC", 1)
        assert exc.value.kind is ErrorKind.MALFORMED_HEX

    def test_odd_after_stripping(self, decoder):
        with pytest.raises(MalformedHex):
            decoder.decode("50:31:3", 1)

    def test_non_hex_digit(self, decoder):
        with pytest.raises(MalformedHex):
            decoder.decode("5G31", 2)

    @pytest.mark.parametrize("length", [0, -3])
    def test_non_positive_length(self, decoder, length):
        with pytest.raises(InvalidLength):
            decoder.decode("5031", length)

    def test_not_enough_pairs(self, decoder):
        with pytest.raises(InvalidLength) as exc:
            decoder.decode("5031", 3)
        assert "required = 3" in str(exc.value)

    def test_empty_string(self, decoder):
        with pytest.raises(InvalidLength):
            decoder.decode("", 1)


class TestText:

    def test_high_bytes_map_one_to_one(self):
        text = HexDecoder.to_text(bytes([0x41, 0xB0, 0xFF]))
        assert text == "A°ÿ"
        assert [ord(c) for c in text] == [0x41, 0xB0, 0xFF]

    def test_decode_text(self, decoder):
        assert decoder.decode_text("50:31:32:33:2c:34:35:36", 8) == "P123,456"
