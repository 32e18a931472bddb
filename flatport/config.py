#!/usr/bin/env python3

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from flatport.patterns import Patterns, compile_patterns
from flatport.reassembler import DEFAULT_MARKER_FORMAT

CONFIG_FILE_NAME = "flatport_config.json"


class PreprocessConfig(BaseModel):
    """Configuration for flattening a single C file."""

    # Files
    input_file: Path = Path("main.c")
    output_file: Path = Path("preprocessed_main.c")
    include_dirs: list[Path] = Field(default_factory=list)

    # Recognition pattern overrides (None uses the built-in pattern)
    function_pattern: str | None = None
    include_pattern: str | None = None
    define_pattern: str | None = None

    # Output
    marker_format: str = DEFAULT_MARKER_FORMAT

    @field_validator("marker_format")
    @classmethod
    def check_marker_format(cls, value: str) -> str:
        try:
            value.format(identity="Function_0", name="main")
        except (AttributeError, KeyError, IndexError, ValueError) as e:
            raise ValueError(f"marker_format must only use {{identity}} and {{name}}: {e!r}") from e
        return value

    def compile_patterns(self) -> Patterns:
        return compile_patterns(
            function=self.function_pattern,
            include=self.include_pattern,
            define=self.define_pattern,
        )

    def search_dirs(self) -> list[Path]:
        """Directories searched for quoted includes, in priority order."""
        dirs = [self.input_file.parent, *self.include_dirs, Path.cwd()]
        unique: list[Path] = []
        for directory in dirs:
            if directory not in unique:
                unique.append(directory)
        return unique

    @classmethod
    def load_from_file(cls, config_path: Path) -> "PreprocessConfig":
        """Load configuration from a JSON file.

        Relative paths are resolved against the directory holding the file.
        """
        args = json.loads(config_path.read_text())
        config = cls.model_validate(args)
        base = config_path.parent
        return config.model_copy(
            update={
                "input_file": base / config.input_file,
                "output_file": base / config.output_file,
                "include_dirs": [base / d for d in config.include_dirs],
            }
        )

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to a JSON file."""
        data = self.model_dump(mode="json")
        config_path.write_text(json.dumps(data, indent=2))

    @classmethod
    def find_config(cls, start_path: Path) -> Optional["PreprocessConfig"]:
        """Find configuration by searching up the directory tree."""
        current = start_path.resolve()
        while True:
            config_file = current / CONFIG_FILE_NAME
            if config_file.exists():
                return cls.load_from_file(config_file)
            if current == current.parent:
                return None
            current = current.parent
