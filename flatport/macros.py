"""Rewrite `#define` lines as Rust `#[cfg]` markers or string constants."""

from flatport.models import MacroDefinition, SourceText
from flatport.patterns import Patterns


def parse_define(line: str, patterns: Patterns) -> MacroDefinition | None:
    """Parse a `#define NAME [value]` line, or return None for any other line."""
    match = patterns.define.search(line)
    if not match:
        return None

    groups = match.groups()
    value = groups[1].strip() if len(groups) > 1 and groups[1] else ""
    return MacroDefinition(name=groups[0], value=value or None)


def _rust_str_literal(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_macro(definition: MacroDefinition) -> str:
    """Flags become `#[cfg(NAME)]`; valued macros become `&str` constants.

    Values are kept as opaque strings, even when they look numeric.
    """
    if definition.is_flag:
        return f"#[cfg({definition.name})]"
    return f"const {definition.name}: &str = {_rust_str_literal(definition.value)};"


def transform_macros(source: SourceText, patterns: Patterns) -> SourceText:
    lines = []
    for line in source.lines:
        definition = parse_define(line, patterns)
        lines.append(line if definition is None else render_macro(definition))
    return SourceText(lines=tuple(lines))
