"""
Emoji Codec - Artifact Emitter

Renders CodecTables as an importable Python module exposing BASE, ALIAS,
TONE_RULES, EXPLICIT_TONES and resolve(name).

Keys are sorted and every literal goes through ascii(), so the same tables
always render to the same bytes regardless of platform or locale.
"""
from __future__ import annotations
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, Tuple, Union

from .types import CodecTables

DEFAULT_GENERATOR = "scripts/gen_emoji_table.py"

MODULE_HEADER = '''"""AUTO-GENERATED FILE. DO NOT EDIT."""
# Source: {source}
# Generator: {generator}
from emoji_codec.lookup import resolve as _resolve
from emoji_codec.types import CodecTables

'''

MODULE_FOOTER = '''
_TABLES = CodecTables.from_literals(BASE, ALIAS, TONE_RULES, EXPLICIT_TONES)


def resolve(name):
    """Glyph for an emoji name (optionally :wrapped: and tone-suffixed), or None."""
    return _resolve(name, _TABLES)
'''


def header_value(text: str) -> str:
    """Path as one ASCII comment line: ascii() escapes without the quotes."""
    return ascii(text)[1:-1]


def render_dict(name: str, items: Iterable[Tuple[Any, Any]]) -> str:
    """Render `name = {...}` with one sorted entry per line."""
    items = sorted(items)
    if not items:
        return f"{name} = {{}}\n"
    lines = [f"{name} = {{"]
    for key, value in items:
        lines.append(f"    {ascii(key)}: {ascii(value)},")
    lines.append("}")
    return "\n".join(lines) + "\n"


def render_module(
    tables: CodecTables,
    source: str,
    generator: str = DEFAULT_GENERATOR,
) -> str:
    """
    Render the generated module source.

    Args:
        tables: Validated codec tables
        source: Dictionary path shown in the header
        generator: Generator path shown in the header

    Returns:
        Module source text (ASCII only)
    """
    parts = [
        MODULE_HEADER.format(source=header_value(source), generator=header_value(generator)),
        render_dict("BASE", tables.base.items()),
        "",
        render_dict("ALIAS", tables.aliases.items()),
        "",
        "# stem -> (insert positions, delete positions), scalar indices into the base glyph",
        render_dict(
            "TONE_RULES",
            ((stem, rule.as_tuple()) for stem, rule in tables.tone_rules.items()),
        ),
        "",
        "# (stem, tones) -> glyph for stems whose toned forms no rule reproduces",
        render_dict("EXPLICIT_TONES", tables.explicit_tones.items()),
        MODULE_FOOTER,
    ]
    return "\n".join(parts)


def write_module(path: Union[str, Path], text: str) -> Path:
    """
    Write module text atomically: temp file in the target directory, then rename.

    Returns:
        Resolved output path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return path.resolve()
