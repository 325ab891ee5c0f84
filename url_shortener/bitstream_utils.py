#!/usr/bin/env python3
from typing import Dict, List, Optional, Tuple

import numpy as np

from url_shortener.errors import TableMismatchError
from url_shortener.huffman_utils import CodeTable

PADDING_LIMIT_BITS = 8
_ZERO = ord("0")


def pack_bits(bits: str) -> bytes:
    arr = np.frombuffer(bits.encode("ascii"), dtype=np.uint8) - _ZERO
    if arr.size and int(arr.max()) > 1:
        raise ValueError("Bit string may only contain '0' and '1'.")
    # packbits zero-fills the last byte, most-significant bit first.
    return np.packbits(arr).tobytes()


def unpack_bits(data: bytes) -> str:
    bits = np.unpackbits(np.frombuffer(data, dtype=np.uint8))
    return (bits + _ZERO).astype(np.uint8).tobytes().decode("ascii")


def encode_symbols(text: str, table: CodeTable) -> bytes:
    codes = table.codes()
    try:
        bits = "".join(codes[sym] for sym in text)
    except KeyError as exc:
        raise LookupError(f"No code for symbol {exc.args[0]!r}; table was built from another input.") from exc
    return pack_bits(bits)


def _match_at(bits: str, pos: int, lookup: Dict[str, str], lengths: List[int]) -> Optional[Tuple[str, int]]:
    for length in lengths:
        end = pos + length
        if end > len(bits):
            return None
        sym = lookup.get(bits[pos:end])
        if sym is not None:
            return sym, length
    return None


def decode_symbols(data: bytes, table: CodeTable) -> str:
    bits = unpack_bits(data)
    lookup = table.lookup()
    lengths = table.code_lengths()
    out = []
    pos = 0
    while len(out) < table.symbol_count:
        match = _match_at(bits, pos, lookup, lengths)
        if match is None:
            raise TableMismatchError(
                f"No code matches at bit {pos} of {len(bits)} "
                f"after {len(out)} of {table.symbol_count} symbols."
            )
        sym, length = match
        out.append(sym)
        pos += length
    tail = bits[pos:]
    if len(tail) >= PADDING_LIMIT_BITS or "1" in tail:
        raise TableMismatchError(f"{len(tail)} trailing bits after the last symbol are not padding.")
    return "".join(out)
