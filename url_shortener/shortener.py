from typing import Tuple

from url_shortener.bitstream_utils import decode_symbols, encode_symbols
from url_shortener.huffman_utils import CodeTable, build_code_table, build_frequency_profile


def encode(text: str) -> Tuple[bytes, CodeTable]:
    """Pack ``text`` with a code built from its own symbol frequencies.

    The returned table is not part of the bytes; keep it to call ``decode``.
    """
    table = build_code_table(build_frequency_profile(text))
    return encode_symbols(text, table), table


def decode(data: bytes, table: CodeTable) -> str:
    return decode_symbols(data, table)
