#!/usr/bin/env python3
import argparse
import os
import sys
from typing import List, Optional

from url_shortener.meta_utils import META_PREFIX, disallowed_chars, read_urls, sha256_text, write_json
from url_shortener.shortener import encode


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Shorten URLs into Huffman-packed bitstreams with JSON code tables.")
    parser.add_argument("--url", action="append", default=[], help="URL to encode (repeatable).")
    parser.add_argument("--input", help="Text file with one URL per line.")
    parser.add_argument("--out-dir", default="out/shortener", help="Output directory.")
    parser.add_argument("--check-chars", action="store_true", help="Warn about characters outside the URL-safe set.")
    parser.add_argument("--overwrite", action="store_true")
    args = parser.parse_args(argv)

    urls = list(args.url)
    if args.input:
        try:
            urls.extend(read_urls(args.input))
        except OSError as exc:
            print(f"Cannot read {args.input}: {exc}", file=sys.stderr)
            return 1
    if not urls:
        print("No URLs given (use --url or --input).", file=sys.stderr)
        return 1

    os.makedirs(args.out_dir, exist_ok=True)
    encoded = 0
    skipped = 0
    errors = 0

    for idx, url in enumerate(urls):
        if not url:
            skipped += 1
            continue

        url_id = f"url_{idx:05d}"
        bs_path = os.path.join(args.out_dir, f"{url_id}.huff")
        meta_path = os.path.join(args.out_dir, f"{META_PREFIX}{url_id}.json")
        if not args.overwrite and os.path.exists(meta_path):
            skipped += 1
            continue

        if args.check_chars:
            bad = disallowed_chars(url)
            if bad:
                print(f"Warning {url_id}: characters outside URL-safe set: {''.join(bad)!r}", file=sys.stderr)

        try:
            packed, table = encode(url)
            with open(bs_path, "wb") as f:
                f.write(packed)
            write_json(meta_path, {
                "layout": "bitstream_huffman_url",
                "url_id": url_id,
                "bitstream_file": os.path.basename(bs_path),
                "num_symbols": len(url),
                "raw_bytes": len(url.encode("utf-8", "surrogatepass")),
                "packed_bytes": len(packed),
                "url_sha256": sha256_text(url),
                "code_table": table.to_dict(),
            })
            encoded += 1
        except (OSError, ValueError, LookupError) as exc:
            print(f"Error {url_id}: {exc}", file=sys.stderr)
            errors += 1

    print(f"Encoded: {encoded}")
    print(f"Skipped: {skipped}")
    if errors:
        print(f"Errors: {errors}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
