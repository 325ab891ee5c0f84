#!/usr/bin/env python3
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

from url_shortener.errors import EmptyInputError


class FrequencyEntry(NamedTuple):
    symbol: str
    count: int


class CodeTable(NamedTuple):
    """Symbol -> bit-string table paired with one encoded input.

    ``entries`` is ordered by ascending code length; ``symbol_count`` is the
    number of symbols the table was built from, which is how many the decoder
    emits before treating the rest of the stream as padding.
    """

    entries: Tuple[Tuple[str, str], ...]
    symbol_count: int

    def codes(self) -> Dict[str, str]:
        return dict(self.entries)

    def lookup(self) -> Dict[str, str]:
        return {code: sym for sym, code in self.entries}

    def code_lengths(self) -> List[int]:
        return sorted({len(code) for _, code in self.entries})

    def to_dict(self) -> Dict:
        return {
            "symbol_count": self.symbol_count,
            "codes": [[sym, code] for sym, code in self.entries],
        }

    @classmethod
    def from_dict(cls, payload: Dict) -> "CodeTable":
        entries = tuple((str(sym), str(code)) for sym, code in payload["codes"])
        table = cls(entries, int(payload["symbol_count"]))
        validate_code_table(table)
        return table


def build_frequency_profile(text: str) -> List[FrequencyEntry]:
    if not text:
        raise EmptyInputError("Cannot profile an empty input.")
    points = np.frombuffer(text.encode("utf-32-le", "surrogatepass"), dtype="<u4")
    values, first, counts = np.unique(points, return_index=True, return_counts=True)
    order = np.argsort(first, kind="stable")
    return [FrequencyEntry(chr(int(values[i])), int(counts[i])) for i in order]


# Merge node: (count, label, children). Leaves carry children=None and the
# symbol as label; internal nodes own (child0, child1).
Node = Tuple[int, str, Optional[Tuple["Node", "Node"]]]


def _merge(work: List[Node]) -> Node:
    while len(work) > 1:
        b = work.pop()
        a = work.pop()
        merged = (a[0] + b[0], a[1] + b[1], (a, b))
        idx = next((i for i, node in enumerate(work) if node[0] < merged[0]), len(work))
        work.insert(idx, merged)
    return work[0]


def _assign_codes(root: Node) -> List[Tuple[str, str]]:
    if root[2] is None:
        # Lone symbol: a zero-length code would pack to nothing.
        return [(root[1], "0")]
    assigned = []
    stack = [(root, "")]
    while stack:
        node, path = stack.pop()
        children = node[2]
        if children is None:
            assigned.append((node[1], path))
            continue
        stack.append((children[1], path + "1"))
        stack.append((children[0], path + "0"))
    return assigned


def build_code_table(profile: Iterable[FrequencyEntry]) -> CodeTable:
    entries = [FrequencyEntry(sym, int(count)) for sym, count in profile]
    if not entries:
        raise EmptyInputError("Cannot build a code table from an empty profile.")
    seen = set()
    for sym, count in entries:
        if count < 1:
            raise ValueError(f"Frequency for {sym!r} must be positive, got {count}.")
        if sym in seen:
            raise ValueError(f"Duplicate symbol {sym!r} in frequency profile.")
        seen.add(sym)

    work: List[Node] = [(count, sym, None) for sym, count in entries]
    work.sort(key=lambda node: -node[0])
    root = _merge(work)

    assigned = _assign_codes(root)
    assigned.sort(key=lambda item: len(item[1]))
    return CodeTable(tuple(assigned), sum(count for _, count in entries))


def is_prefix_free(codes: Iterable[str]) -> bool:
    ordered = sorted(codes)
    for prev, cur in zip(ordered, ordered[1:]):
        if cur.startswith(prev):
            return False
    return True


def validate_code_table(table: CodeTable) -> None:
    if not table.entries:
        raise ValueError("Code table has no entries.")
    if table.symbol_count < 1:
        raise ValueError(f"Invalid symbol_count {table.symbol_count}.")
    symbols = [sym for sym, _ in table.entries]
    if len(set(symbols)) != len(symbols):
        raise ValueError("Code table maps a symbol more than once.")
    for sym, code in table.entries:
        if not code or set(code) - {"0", "1"}:
            raise ValueError(f"Invalid code {code!r} for symbol {sym!r}.")
    if not is_prefix_free(code for _, code in table.entries):
        raise ValueError("Code table is not prefix-free.")
