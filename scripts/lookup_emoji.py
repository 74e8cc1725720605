#!/usr/bin/env python3
"""
Emoji Lookup CLI

Builds the codec tables in memory from a dictionary and resolves names.

Usage:
    python scripts/lookup_emoji.py emoji.json thumbsup_tone2 flag_us :smile:
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from emoji_codec.errors import CodecError
from emoji_codec.generator import generate_tables
from emoji_codec.loader import load_dictionary
from emoji_codec.lookup import resolve


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Resolve emoji names through generated codec tables.")
    p.add_argument("dictionary", help="Emoji dictionary JSON")
    p.add_argument("names", nargs="+", help="Names to resolve (optionally :wrapped: or tone-suffixed)")
    p.add_argument("--escape", action="store_true", help="Print glyphs as escaped code points")
    p.add_argument("--verbose", action="store_true", help="Log pipeline progress")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        tables = generate_tables(load_dictionary(args.dictionary)).tables
    except (CodecError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    missing = 0
    for name in args.names:
        glyph = resolve(name, tables)
        if glyph is None:
            print(f"{name}: <not found>")
            missing += 1
        elif args.escape:
            print(f"{name}: {ascii(glyph)}")
        else:
            print(f"{name}: {glyph}")

    return 1 if missing else 0


if __name__ == "__main__":
    sys.exit(main())
