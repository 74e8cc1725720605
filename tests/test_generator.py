"""
End-to-end tests for table generation, validation, the emitted module and
the generator CLI.
"""
import importlib.util
import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from emoji_codec.config import CONFIG_ENV_VAR, GeneratorConfig
from emoji_codec.emitter import render_dict, render_module
from emoji_codec.errors import DictionaryFormatError, RoundTripError, TableInvariantError
from emoji_codec.generator import build_tables, generate, generate_tables
from emoji_codec.loader import load_dictionary
from emoji_codec.types import CodecTables, ToneRule
from emoji_codec.validator import (
    find_mismatches,
    validate_round_trip,
    validate_table_invariants,
)
from scripts import gen_emoji_table, lookup_emoji
from tests.sample_dictionary import SAMPLE, THUMBSUP, TONES

# Tone variants of a formula name cannot be rebuilt: the formula answers first
BROKEN = dict(SAMPLE, five_tone1="5\uFE0F\u20E3" + TONES[1])


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================

def write_dictionary(path: Path, dictionary) -> Path:
    path.write_text(json.dumps(dictionary, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


def generate_and_read(tmp_path, sample_json, name="emoji_table.py"):
    out = tmp_path / name
    generate(sample_json, out)
    return out.read_text(encoding="utf-8")


def import_module_from(path: Path):
    spec = importlib.util.spec_from_file_location(f"generated_{path.stem}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def sample_json(tmp_path):
    return write_dictionary(tmp_path / "emoji.json", SAMPLE)


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


# ==============================================================================
# TEST: TABLE BUILDING
# ==============================================================================

def test_round_trip_every_entry():
    result = generate_tables(SAMPLE)
    assert find_mismatches(SAMPLE, result.tables) == []


def test_stats():
    stats = generate_tables(SAMPLE).stats
    assert stats.source_keys == len(SAMPLE) == 52
    assert stats.tone_variant_names == 20
    assert stats.droppable_names == 11
    assert stats.alias_entries == 9
    assert stats.base_entries == 13
    assert stats.tone_rule_stems == 4
    assert stats.explicit_tone_entries == 6


def test_table_invariants_hold():
    result = generate_tables(SAMPLE)
    is_valid, errors = validate_table_invariants(result.tables, result.droppable)
    assert is_valid, errors


def test_invariant_violations_reported():
    tables = CodecTables(
        base={"five": "5", "a": "x"},
        aliases={"b": "c", "c": "a"},
        tone_rules={},
    )
    is_valid, errors = validate_table_invariants(tables, {"five"})
    assert not is_valid
    assert any("points to another alias" in e for e in errors)
    assert any("Formula-derivable name 'five'" in e for e in errors)

    with pytest.raises(TableInvariantError):
        validate_round_trip({}, tables, droppable={"five"})


def test_alias_to_unknown_name_reported():
    tables = CodecTables(base={"a": "x"}, aliases={"x": "ghost"})
    is_valid, errors = validate_table_invariants(tables, set())

    assert not is_valid
    assert errors == ["Alias 'x' points to unknown name 'ghost'"]
    with pytest.raises(TableInvariantError) as exc_info:
        validate_round_trip({}, tables)
    assert exc_info.value.errors == errors


def test_alias_to_droppable_name_allowed():
    tables = CodecTables(aliases={"us": "flag_us"})
    assert validate_table_invariants(tables, {"flag_us"}) == (True, [])


def test_tone_rule_without_base_reported():
    tables = CodecTables(base={"a": "x"}, tone_rules={"nobase": ToneRule((1,))})
    is_valid, errors = validate_table_invariants(tables, set())

    assert not is_valid
    assert errors == ["Tone rule for 'nobase' has no base glyph"]
    with pytest.raises(TableInvariantError) as exc_info:
        validate_round_trip({}, tables)
    assert "nobase" in str(exc_info.value)


def test_round_trip_failure_lists_every_mismatch():
    broken = dict(BROKEN, clock3_tone2="\U0001F552" + TONES[2])
    result = build_tables(broken)

    with pytest.raises(RoundTripError) as exc_info:
        validate_round_trip(broken, result.tables, droppable=result.droppable)

    names = [m.name for m in exc_info.value.mismatches]
    assert names == ["five_tone1", "clock3_tone2"]
    assert exc_info.value.mismatches[0].actual == "5\uFE0F\u20E3"
    assert "Mismatches: 2" in str(exc_info.value)


def test_mismatch_description_is_escaped():
    result = build_tables(BROKEN)
    with pytest.raises(RoundTripError) as exc_info:
        validate_round_trip(BROKEN, result.tables, droppable=result.droppable)

    line = exc_info.value.mismatches[0].describe()
    assert line.startswith("five_tone1: expected ")
    assert line.isascii()


# ==============================================================================
# TEST: EMITTED MODULE
# ==============================================================================

def test_render_dict_sorted_and_escaped():
    text = render_dict("T", [("b", "\U0001F44D"), ("a", "x")])
    assert text == "T = {\n    'a': 'x',\n    'b': '\\U0001f44d',\n}\n"
    assert render_dict("EMPTY", []) == "EMPTY = {}\n"


def test_generated_module_round_trip(tmp_path, sample_json):
    out = tmp_path / "emoji_table.py"
    generate(sample_json, out)

    module = import_module_from(out)
    for name, glyph in SAMPLE.items():
        assert module.resolve(name) == glyph, name
    assert module.resolve(":thumbsup_tone4:") == THUMBSUP + TONES[4]
    assert module.resolve("totally_unknown_name") is None
    assert module.TONE_RULES["thumbsup"] == ((1,), ())
    assert ("handshake", (1, 2)) in module.EXPLICIT_TONES
    assert "flag_us" not in module.BASE
    assert module.ALIAS["us"] == "flag_us"


def test_generated_module_is_ascii(tmp_path, sample_json):
    out = generate_and_read(tmp_path, sample_json)
    assert out.isascii()
    assert "AUTO-GENERATED FILE. DO NOT EDIT." in out


@pytest.mark.parametrize("source", [
    "donn\u00e9es/emoji.json",
    'odd"""name.json',
    "trailing\\",
    "two\nlines.json",
])
def test_header_paths_keep_module_importable(tmp_path, source):
    out = tmp_path / "odd_header.py"
    text = render_module(generate_tables(SAMPLE).tables, source=source)
    out.write_text(text, encoding="utf-8")

    assert text.isascii()
    module = import_module_from(out)
    assert module.resolve("thumbsup") == THUMBSUP


def test_generated_module_depends_only_on_emoji_codec(tmp_path, sample_json):
    out = generate_and_read(tmp_path, sample_json)
    imports = [line for line in out.splitlines() if line.startswith(("import ", "from "))]
    assert imports == [
        "from emoji_codec.lookup import resolve as _resolve",
        "from emoji_codec.types import CodecTables",
    ]


def test_generation_is_deterministic(tmp_path, sample_json):
    first = generate_and_read(tmp_path, sample_json, "first.py")
    second = generate_and_read(tmp_path, sample_json, "second.py")
    assert first == second

    reordered = dict(reversed(list(SAMPLE.items())))
    assert render_module(generate_tables(reordered).tables, source="emoji.json") == \
        render_module(generate_tables(SAMPLE).tables, source="emoji.json")


def test_failed_generation_writes_nothing(tmp_path):
    source = write_dictionary(tmp_path / "broken.json", BROKEN)
    out = tmp_path / "emoji_table.py"

    with pytest.raises(RoundTripError):
        generate(source, out)
    assert not out.exists()
    assert list(tmp_path.iterdir()) == [source]


def test_failed_generation_keeps_previous_artifact(tmp_path, sample_json):
    out = tmp_path / "emoji_table.py"
    generate(sample_json, out)
    before = out.read_bytes()

    source = write_dictionary(tmp_path / "broken.json", BROKEN)
    with pytest.raises(RoundTripError):
        generate(source, out)
    assert out.read_bytes() == before


# ==============================================================================
# TEST: CLI
# ==============================================================================

def test_cli_success(tmp_path, sample_json, capsys):
    out = tmp_path / "gen" / "emoji_table.py"
    code = gen_emoji_table.main([str(sample_json), str(out)])

    captured = capsys.readouterr()
    assert code == 0
    assert out.exists()
    assert "Validation: OK" in captured.out
    assert "Original keys: 52" in captured.out


def test_cli_default_paths(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    write_dictionary(tmp_path / "emoji.json", SAMPLE)

    assert gen_emoji_table.main([]) == 0
    assert (tmp_path / "emoji_table.py").exists()


def test_cli_validation_failure(tmp_path, capsys):
    source = write_dictionary(tmp_path / "broken.json", BROKEN)
    out = tmp_path / "emoji_table.py"

    code = gen_emoji_table.main([str(source), str(out)])

    captured = capsys.readouterr()
    assert code == 1
    assert not out.exists()
    assert "five_tone1: expected" in captured.err
    assert "Validation failed. Mismatches: 1" in captured.err


def test_cli_missing_input(tmp_path, capsys):
    code = gen_emoji_table.main([str(tmp_path / "nope.json"), str(tmp_path / "out.py")])
    assert code == 1
    assert "Error:" in capsys.readouterr().err


def test_load_non_utf8_dictionary(tmp_path):
    path = tmp_path / "bad.json"
    path.write_bytes(b"\xff\xfe{}")

    with pytest.raises(DictionaryFormatError):
        load_dictionary(path)


def test_cli_non_utf8_input(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_bytes(b"\xff\xfe")
    out = tmp_path / "out.py"

    assert gen_emoji_table.main([str(path), str(out)]) == 1
    assert "Error:" in capsys.readouterr().err
    assert not out.exists()

    assert lookup_emoji.main([str(path), "smile"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_cli_directory_input(tmp_path, capsys):
    folder = tmp_path / "folder"
    folder.mkdir()

    assert gen_emoji_table.main([str(folder), str(tmp_path / "out.py")]) == 1
    assert "Error:" in capsys.readouterr().err

    assert lookup_emoji.main([str(folder), "smile"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_cli_reads_config_from_env(tmp_path, monkeypatch):
    write_dictionary(tmp_path / "custom.json", SAMPLE)
    config = tmp_path / "codec.yaml"
    config.write_text(
        f"input_path: {tmp_path / 'custom.json'}\n"
        f"output_path: {tmp_path / 'custom_table.py'}\n"
        "log_level: warning\n",
        encoding="utf-8",
    )
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config))

    assert gen_emoji_table.main([]) == 0
    assert (tmp_path / "custom_table.py").exists()


def test_lookup_cli(sample_json, capsys):
    code = lookup_emoji.main([str(sample_json), "thumbsup_tone2", "flag_us", "--escape"])
    out = capsys.readouterr().out
    assert code == 0
    assert "thumbsup_tone2: '\\U0001f44d\\U0001f3fc'" in out


def test_lookup_cli_unknown_name(sample_json, capsys):
    code = lookup_emoji.main([str(sample_json), "smile", "nope"])
    out = capsys.readouterr().out
    assert code == 1
    assert "nope: <not found>" in out


# ==============================================================================
# TEST: CONFIG
# ==============================================================================

def test_config_defaults():
    config = GeneratorConfig()
    assert config.input_path == "emoji.json"
    assert config.output_path == "emoji_table.py"
    assert GeneratorConfig.from_dict(config.to_dict()) == config


def test_config_rejects_unknown_keys():
    with pytest.raises(ValueError):
        GeneratorConfig.from_dict({"input_path": "a.json", "flags": True})


def test_config_rejects_bad_log_level():
    with pytest.raises(ValueError):
        GeneratorConfig(log_level="LOUD")


def test_config_from_env_unset():
    assert GeneratorConfig.from_env({}) == GeneratorConfig()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
