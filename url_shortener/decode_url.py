#!/usr/bin/env python3
import argparse
import os
import sys
from typing import List, Optional

from url_shortener.huffman_utils import CodeTable
from url_shortener.meta_utils import iter_meta_files, load_json, sha256_text
from url_shortener.shortener import decode


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Decode shortened URL bitstreams and verify exact match.")
    parser.add_argument("--bitstream-dir", required=True, help="Directory containing encoder outputs.")
    parser.add_argument("--verify", action="store_true", help="Compare decoded URLs with the recorded digest.")
    parser.add_argument("--show", action="store_true", help="Print each decoded URL.")
    args = parser.parse_args(argv)

    meta_files = list(iter_meta_files(args.bitstream_dir))
    if not meta_files:
        print(f"No bitstream_meta_*.json found under {args.bitstream_dir}", file=sys.stderr)
        return 1

    checked = 0
    failed = 0
    for meta_path in meta_files:
        try:
            meta = load_json(meta_path)
            table = CodeTable.from_dict(meta["code_table"])
            bs_path = os.path.join(os.path.dirname(meta_path), meta["bitstream_file"])
            with open(bs_path, "rb") as f:
                url = decode(f.read(), table)
        except (OSError, KeyError, ValueError) as exc:
            print(f"Error {meta_path}: {exc}", file=sys.stderr)
            failed += 1
            continue

        if args.show:
            print(f"{meta.get('url_id', '')}\t{url}")
        if args.verify and sha256_text(url) != meta.get("url_sha256"):
            print(f"Mismatch: {meta_path}", file=sys.stderr)
            failed += 1
            continue
        checked += 1

    print(f"Checked: {checked}, Failed: {failed}")
    return 0 if failed == 0 else 2


if __name__ == "__main__":
    raise SystemExit(main())
