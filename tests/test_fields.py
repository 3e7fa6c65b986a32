"""
Tests for fields.py: token splitting, value parsing, arity checks.
"""

import pytest

from sensor_locator.catalog import DEFAULT_CATALOG
from sensor_locator.errors import (
    ArityMismatch,
    EmptyPayload,
    ErrorKind,
    MalformedValue,
    UnknownFieldType,
)
from sensor_locator.fields import FieldDecoder, split_tokens


@pytest.fixture
def decoder():
    return FieldDecoder()


class TestDecodeOne:

    def test_temperature(self, decoder):
        f = decoder.decode_one("T23.5")
        assert f.code == "T"
        assert f.raw == "T23.5"
        assert f.name == "Temperature"
        assert f.values == (23.5,)
        assert f.units == ("centigrades",)

    def test_position_order_preserved(self, decoder):
        f = decoder.decode_one("P123,456")
        assert f.values == (123.0, 456.0)
        assert f.units == ("degrees", "degrees")
        assert f.is_position

    def test_negative_and_integer_values(self, decoder):
        assert decoder.decode_one("W-3,270").values == (-3.0, 270.0)

    def test_arity_mismatch(self, decoder):
        with pytest.raises(ArityMismatch) as exc:
            decoder.decode_one("T23.5,1.0")
        assert exc.value.expected == 1
        assert exc.value.actual == 2
        assert "1" in str(exc.value) and "2" in str(exc.value)

    def test_too_few_values(self, decoder):
        with pytest.raises(ArityMismatch):
            decoder.decode_one("P42.0")

    def test_non_numeric(self, decoder):
        with pytest.raises(MalformedValue) as exc:
            decoder.decode_one("Tabc")
        assert exc.value.kind is ErrorKind.MALFORMED_VALUE

    def test_empty_value(self, decoder):
        with pytest.raises(MalformedValue):
            decoder.decode_one("P1,")

    @pytest.mark.parametrize("token", ["Tnan", "Pinf,1", "P1,-infinity", "T1_0", "T1e999", "T0x1p3"])
    def test_only_finite_decimals(self, decoder, token):
        with pytest.raises(MalformedValue):
            decoder.decode_one(token)

    def test_decimal_forms(self, decoder):
        assert decoder.decode_one("W.5,1.").values == (0.5, 1.0)
        assert decoder.decode_one("T+2.5e1").values == (25.0,)

    @pytest.mark.parametrize("token", ["", "T"])
    def test_too_short(self, decoder, token):
        with pytest.raises(MalformedValue):
            decoder.decode_one(token)

    def test_unknown_code(self, decoder):
        with pytest.raises(UnknownFieldType):
            decoder.decode_one("Z1.0")

    @pytest.mark.parametrize("code", DEFAULT_CATALOG.codes())
    def test_every_code_accepts_its_arity(self, decoder, code):
        arity = DEFAULT_CATALOG.lookup(code).arity
        good = code + ",".join("1.5" for _ in range(arity))
        bad = code + ",".join("1.5" for _ in range(arity + 1))
        assert len(decoder.decode_one(good).values) == arity
        with pytest.raises(ArityMismatch):
            decoder.decode_one(bad)

    def test_decoding_is_stable(self, decoder):
        assert decoder.decode_one("C12.5,90") == decoder.decode_one("C12.5,90")


class TestDecodeAll:

    def test_multiple_fields(self, decoder):
        fields = decoder.decode_all("P42.5,-8.25;T23.5;R0.4")
        assert [f.code for f in fields] == ["P", "T", "R"]

    def test_trailing_separator(self, decoder):
        assert len(decoder.decode_all("T23.5;")) == 1

    @pytest.mark.parametrize("payload", ["", ";", ";;"])
    def test_empty_payload(self, decoder, payload):
        with pytest.raises(EmptyPayload):
            decoder.decode_all(payload)

    def test_one_bad_token_fails_all(self, decoder):
        with pytest.raises(MalformedValue):
            decoder.decode_all("T23.5;Uxx")

    def test_split_tokens_keeps_inner_empties(self):
        assert split_tokens("T1;;U2;") == ["T1", "", "U2"]


class TestRender:

    def test_render(self, decoder):
        assert decoder.decode_one("W3.5,270").render() == "Wind = 3.5 (m/s), 270.0 (degrees)"
        assert str(decoder.decode_one("T23.5")) == "Temperature = 23.5 (centigrades)"
