"""Pydantic models passed between preprocessing stages."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict


def split_lines(text: str) -> list[str]:
    """Split on LF only, dropping one trailing CR per line and the final empty line.

    Form feeds and lone CRs stay inside the line they appear in.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_source_file(path: Path) -> str:
    """Read UTF-8 text without newline translation."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


class SourceText(BaseModel):
    """An immutable sequence of source lines, without line terminators."""

    model_config = ConfigDict(frozen=True)

    lines: tuple[str, ...] = ()

    @classmethod
    def from_text(cls, text: str) -> "SourceText":
        return cls(lines=tuple(split_lines(text)))

    def render(self) -> str:
        """Join lines back into text, terminating every line with a newline."""
        return "".join(f"{line}\n" for line in self.lines)

    def __len__(self) -> int:
        return len(self.lines)


class IncludeDirective(BaseModel):
    """A quoted `#include "target"` found on a single line."""

    target: str
    line_number: int


class CodeElement(BaseModel):
    """A function definition detected on a single line."""

    model_config = ConfigDict(frozen=True)

    identity: str
    origin_line: int  # 0-based index into the inlined source
    raw_text: str
    name: str | None = None  # identifier captured by the detection pattern


class MacroDefinition(BaseModel):
    """A `#define NAME [value]` line."""

    name: str
    value: str | None = None

    @property
    def is_flag(self) -> bool:
        return self.value is None
