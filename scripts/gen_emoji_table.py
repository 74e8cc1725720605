#!/usr/bin/env python3
"""
Emoji Table Generator

Compresses an emoji name -> glyph JSON dictionary into a Python module with:
- a canonical BASE map (deduplicated glyphs)
- an ALIAS map (synonyms -> canonical name)
- skin-tone rules (insert Fitzpatrick modifiers, optionally drop U+FE0F)
- explicit toned glyphs for stems no rule covers
Flags, regional indicators, keycaps and clock faces are recomputed at runtime.

The generated resolve(name) is checked against every dictionary entry before
the module is written. Any mismatch aborts with exit status 1.

Usage:
    python scripts/gen_emoji_table.py
    python scripts/gen_emoji_table.py data/emoji.json src/emoji_table.py

Defaults come from the YAML file named by EMOJI_CODEC_CONFIG, if set.
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from emoji_codec.config import GeneratorConfig
from emoji_codec.errors import CodecError, RoundTripError, TableInvariantError
from emoji_codec.generator import generate, summarize_stats


def parse_args(argv=None, config: GeneratorConfig = None):
    config = config or GeneratorConfig()
    p = argparse.ArgumentParser(description="Generate the emoji lookup table module.")
    p.add_argument("input", nargs="?", default=config.input_path,
                   help=f"Emoji dictionary JSON (default: {config.input_path})")
    p.add_argument("output", nargs="?", default=config.output_path,
                   help=f"Generated module path (default: {config.output_path})")
    return p.parse_args(argv)


def main(argv=None) -> int:
    try:
        config = GeneratorConfig.from_env()
    except (OSError, ValueError) as e:
        print(f"Error: could not load config: {e}", file=sys.stderr)
        return 1

    args = parse_args(argv, config)
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        result = generate(args.input, args.output)
    except RoundTripError as e:
        for mismatch in e.mismatches:
            print(mismatch.describe(), file=sys.stderr)
        print(f"Validation failed. Mismatches: {len(e.mismatches)}", file=sys.stderr)
        return 1
    except TableInvariantError as e:
        for error in e.errors:
            print(error, file=sys.stderr)
        print(f"Validation failed. Invariant errors: {len(e.errors)}", file=sys.stderr)
        return 1
    except (CodecError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Generated: {Path(args.output).resolve()}")
    for label, value in summarize_stats(result.stats).items():
        print(f"{label}: {value}")
    print("Validation: OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
