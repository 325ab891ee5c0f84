import pytest

from url_shortener.bitstream_utils import decode_symbols, encode_symbols, pack_bits, unpack_bits
from url_shortener.errors import DecodeError, TableMismatchError
from url_shortener.huffman_utils import build_code_table, build_frequency_profile


@pytest.fixture
def abra_table():
    return build_code_table(build_frequency_profile("abracadabra"))


class TestBitPacking:
    def test_pack_msb_first_with_zero_padding(self):
        assert pack_bits("1") == b"\x80"
        assert pack_bits("101000100101001110100010") == b"\xa2\x53\xa2"

    def test_pack_aligned_adds_no_extra_byte(self):
        assert pack_bits("11111111") == b"\xff"

    def test_pack_empty(self):
        assert pack_bits("") == b""

    def test_pack_rejects_non_bits(self):
        with pytest.raises(ValueError):
            pack_bits("0120")

    def test_unpack(self):
        assert unpack_bits(b"\x80\x01") == "1000000000000001"
        assert unpack_bits(b"") == ""


class TestEncodeDecodeSymbols:
    def test_abracadabra_bytes(self, abra_table):
        assert encode_symbols("abracadabra", abra_table) == b"\xa2\x53\xa2"

    def test_decode_abracadabra(self, abra_table):
        assert decode_symbols(b"\xa2\x53\xa2", abra_table) == "abracadabra"

    def test_missing_symbol_is_lookup_error(self, abra_table):
        with pytest.raises(LookupError, match="No code for symbol 'z'"):
            encode_symbols("abz", abra_table)

    def test_truncated_stream(self, abra_table):
        with pytest.raises(TableMismatchError, match="No code matches"):
            decode_symbols(b"\xa2\x53", abra_table)

    def test_extra_byte_is_not_padding(self, abra_table):
        with pytest.raises(TableMismatchError, match="not padding"):
            decode_symbols(b"\xa2\x53\xa2\x00", abra_table)

    def test_nonzero_padding(self, abra_table):
        with pytest.raises(TableMismatchError, match="not padding"):
            decode_symbols(b"\xa2\x53\xa3", abra_table)

    def test_foreign_table(self):
        table = build_code_table(build_frequency_profile("aaaa"))
        with pytest.raises(DecodeError):
            decode_symbols(b"\xa2\x53\xa2", table)

    def test_padding_that_spells_a_code_is_ignored(self):
        # "a" is coded as 0, so each padding bit would otherwise decode as another "a".
        table = build_code_table(build_frequency_profile("aab"))
        assert table.codes() == {"a": "0", "b": "1"}
        packed = encode_symbols("aab", table)
        assert unpack_bits(packed) == "00100000"
        assert decode_symbols(packed, table) == "aab"
