#!/usr/bin/env python3
import argparse
import csv
import os
import sys
from typing import Dict, List, Optional

import numpy as np
import zstandard as zstd

from url_shortener.huffman_utils import CodeTable, FrequencyEntry, build_frequency_profile
from url_shortener.meta_utils import iter_meta_files, load_json
from url_shortener.shortener import decode


def size(path: str) -> int:
    return os.path.getsize(path)


def ratio(raw: float, comp: float) -> float:
    return raw / comp if comp > 0 else 0.0


def entropy_bits(profile: List[FrequencyEntry]) -> float:
    counts = np.array([count for _, count in profile], dtype=np.float64)
    probs = counts / counts.sum()
    return float(-(probs * np.log2(probs)).sum())


def avg_code_bits(profile: List[FrequencyEntry], table: CodeTable) -> float:
    codes = table.codes()
    total = sum(count for _, count in profile)
    return sum(count * len(codes[sym]) for sym, count in profile) / total


def zstd_size(data: bytes, level: int) -> int:
    return len(zstd.ZstdCompressor(level=level).compress(data))


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze shortened URL compression ratios.")
    parser.add_argument("--bitstream-dir", required=True)
    parser.add_argument("--out-dir", default="out/shortener")
    parser.add_argument("--include-meta", action="store_true", help="Count sidecar JSON bytes as compressed size.")
    parser.add_argument("--zstd-level", type=int, default=3)
    args = parser.parse_args(argv)

    meta_files = list(iter_meta_files(args.bitstream_dir))
    if not meta_files:
        print(f"No bitstream_meta_*.json found under {args.bitstream_dir}", file=sys.stderr)
        return 1

    os.makedirs(args.out_dir, exist_ok=True)
    rows: List[Dict] = []
    totals = {"raw": 0.0, "comp": 0.0, "zstd": 0.0}
    errors = 0

    for meta_path in meta_files:
        try:
            meta = load_json(meta_path)
            table = CodeTable.from_dict(meta["code_table"])
            bs_path = os.path.join(os.path.dirname(meta_path), meta["bitstream_file"])
            with open(bs_path, "rb") as f:
                url = decode(f.read(), table)
        except (OSError, KeyError, ValueError) as exc:
            print(f"Error {meta_path}: {exc}", file=sys.stderr)
            errors += 1
            continue

        raw = url.encode("utf-8", "surrogatepass")
        comp = float(size(bs_path))
        if args.include_meta:
            comp += size(meta_path)
        z = zstd_size(raw, args.zstd_level)
        profile = build_frequency_profile(url)

        totals["raw"] += len(raw)
        totals["comp"] += comp
        totals["zstd"] += z

        rows.append({
            "url_id": meta.get("url_id", ""),
            "raw_bytes": len(raw),
            "packed_bytes": comp,
            "ratio": ratio(len(raw), comp),
            "entropy_bits": entropy_bits(profile),
            "avg_code_bits": avg_code_bits(profile, table),
            "zstd_ratio": ratio(len(raw), z),
        })

    csv_path = os.path.join(args.out_dir, "shortener_metrics.csv")
    with open(csv_path, "w", encoding="utf-8", newline="") as f:
        headers = list(rows[0].keys()) if rows else []
        writer = csv.DictWriter(f, fieldnames=headers)
        writer.writeheader()
        writer.writerows(rows)

    summary_path = os.path.join(args.out_dir, "shortener_summary.md")
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write("# Shortener Bitstream Summary\n\n")
        f.write(f"- URLs analyzed: {len(rows)}\n")
        f.write(f"- Include meta bytes: {bool(args.include_meta)}\n\n")
        f.write(f"- Weighted ratio: {ratio(totals['raw'], totals['comp']):.3f}\n")
        f.write(f"- Weighted zstd ratio (level {args.zstd_level}): {ratio(totals['raw'], totals['zstd']):.3f}\n")

    print(f"Wrote {csv_path}")
    print(f"Wrote {summary_path}")
    if errors:
        print(f"Errors: {errors}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
