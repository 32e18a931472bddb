#!/usr/bin/env python3

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from flatport.config import CONFIG_FILE_NAME, PreprocessConfig
from flatport.errors import PatternCompilationError


def test_defaults():
    config = PreprocessConfig()
    assert config.input_file == Path("main.c")
    assert config.output_file == Path("preprocessed_main.c")
    assert config.marker_format == "// Function start: {identity}"


def test_search_dirs_order(tmp_path):
    config = PreprocessConfig(
        input_file=tmp_path / "src" / "main.c", include_dirs=[tmp_path / "inc"]
    )
    dirs = config.search_dirs()
    assert dirs[:2] == [tmp_path / "src", tmp_path / "inc"]
    assert dirs[-1] == Path.cwd()


def test_round_trip_resolves_relative_paths(tmp_path):
    config_path = tmp_path / CONFIG_FILE_NAME
    PreprocessConfig(input_file=Path("a.c"), include_dirs=[Path("include")]).save_to_file(config_path)

    loaded = PreprocessConfig.load_from_file(config_path)
    assert loaded.input_file == tmp_path / "a.c"
    assert loaded.output_file == tmp_path / "preprocessed_main.c"
    assert loaded.include_dirs == [tmp_path / "include"]


def test_find_config_walks_up(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text(json.dumps({"input_file": "lib.c"}))
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    config = PreprocessConfig.find_config(nested)
    assert config is not None
    assert config.input_file == tmp_path.resolve() / "lib.c"


def test_invalid_pattern():
    config = PreprocessConfig(function_pattern="(unclosed")
    with pytest.raises(PatternCompilationError, match="function") as exc_info:
        config.compile_patterns()
    assert exc_info.value.pattern == "(unclosed"


@pytest.mark.parametrize("marker_format", ["// {fn}", "// {identity", "// {0}", "// {identity.x}"])
def test_invalid_marker_format(marker_format):
    with pytest.raises(ValidationError, match="marker_format"):
        PreprocessConfig(marker_format=marker_format)


def test_valid_marker_format():
    config = PreprocessConfig(marker_format="/* {name} {identity} {{literal}} */")
    assert config.marker_format == "/* {name} {identity} {{literal}} */"


def test_include_pattern_needs_group():
    config = PreprocessConfig(include_pattern=r'#include\s+"[^"]+"')
    with pytest.raises(PatternCompilationError, match="include") as exc_info:
        config.compile_patterns()
    assert "capture group" in exc_info.value.reason


def test_define_pattern_with_name_only():
    patterns = PreprocessConfig(define_pattern=r"^#define\s+(\w+)").compile_patterns()
    assert patterns.define.groups == 1
