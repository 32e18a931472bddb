"""Regular expressions used to recognize includes, functions and macros."""

import re

from pydantic import BaseModel, ConfigDict

from flatport.errors import PatternCompilationError

INCLUDE_PATTERN = r'^\s*#include\s+"([^"]+)"'

# return type, identifier, argument list and opening brace on one line
FUNCTION_PATTERN = r"(\w+\s+(?P<name>\w+)\s*\(.*\)\s*\{)"

DEFINE_PATTERN = r"^\s*#define\s+(\w+)\s*(.*)$"


class Patterns(BaseModel):
    """Compiled recognition patterns for one run."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    include: re.Pattern
    function: re.Pattern
    define: re.Pattern


def _compile(pattern_name: str, pattern: str, min_groups: int = 0) -> re.Pattern:
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise PatternCompilationError(pattern_name, pattern, str(e)) from e
    if compiled.groups < min_groups:
        raise PatternCompilationError(
            pattern_name, pattern, f"needs at least {min_groups} capture group(s)"
        )
    return compiled


def compile_patterns(
    function: str | None = None,
    include: str | None = None,
    define: str | None = None,
) -> Patterns:
    """Compile the default patterns, or the given overrides.

    The include pattern must capture the file name and the define pattern the
    macro name (an optional second group captures the value).
    """
    return Patterns(
        include=_compile("include", include or INCLUDE_PATTERN, min_groups=1),
        function=_compile("function", function or FUNCTION_PATTERN),
        define=_compile("define", define or DEFINE_PATTERN, min_groups=1),
    )
