from url_shortener.bitstream_utils import decode_symbols, encode_symbols, pack_bits, unpack_bits
from url_shortener.errors import DecodeError, EmptyInputError, ShortenerError, TableMismatchError
from url_shortener.huffman_utils import CodeTable, FrequencyEntry, build_code_table, build_frequency_profile
from url_shortener.shortener import decode, encode

__all__ = [
    "CodeTable",
    "DecodeError",
    "EmptyInputError",
    "FrequencyEntry",
    "ShortenerError",
    "TableMismatchError",
    "build_code_table",
    "build_frequency_profile",
    "decode",
    "decode_symbols",
    "encode",
    "encode_symbols",
    "pack_bits",
    "unpack_bits",
]
