"""Replace quoted `#include` lines with the contents of the named file."""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from flatport.errors import MissingIncludeError
from flatport.models import IncludeDirective, SourceText, read_source_file, split_lines
from flatport.patterns import Patterns

logger = logging.getLogger(__name__)


class InlineResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    source: SourceText
    warnings: list[MissingIncludeError] = Field(default_factory=list)
    inlined: list[Path] = Field(default_factory=list)


def find_include(target: str, search_dirs: list[Path]) -> Path | None:
    """Return the first existing file named `target` under `search_dirs`."""
    for directory in search_dirs:
        candidate = directory / target
        if candidate.is_file():
            return candidate
    return None


def _read_include(directive: IncludeDirective, search_dirs: list[Path]) -> tuple[Path, str]:
    path = find_include(directive.target, search_dirs)
    if path is None:
        raise MissingIncludeError(directive.target)
    try:
        return path, read_source_file(path)
    except (OSError, UnicodeDecodeError) as e:
        raise MissingIncludeError(directive.target, f"could not be read ({e})") from e


def inline_includes(
    source: SourceText, search_dirs: list[Path], patterns: Patterns
) -> InlineResult:
    """Inline every quoted include, one level deep.

    Includes inside the inlined text are left as they are. A file that cannot
    be found or read drops its include line and is reported as a warning.
    """
    lines: list[str] = []
    warnings: list[MissingIncludeError] = []
    inlined: list[Path] = []

    for line_number, line in enumerate(source.lines):
        match = patterns.include.search(line)
        if not match:
            lines.append(line)
            continue

        directive = IncludeDirective(target=match.group(1), line_number=line_number)
        try:
            path, content = _read_include(directive, search_dirs)
        except MissingIncludeError as e:
            logger.warning(str(e))
            warnings.append(e)
            continue

        logger.debug(f"Inlined {path} at line {line_number}")
        lines.extend(split_lines(content))
        inlined.append(path)

    return InlineResult(source=SourceText(lines=tuple(lines)), warnings=warnings, inlined=inlined)
