"""Detect function definitions line by line."""

import logging

from flatport.models import CodeElement, SourceText
from flatport.patterns import Patterns

logger = logging.getLogger(__name__)


def element_identity(line_index: int) -> str:
    return f"Function_{line_index}"


def extract_elements(source: SourceText, patterns: Patterns) -> list[CodeElement]:
    """Create a CodeElement for every line that looks like a function definition.

    Detection is line-local: a signature split across several lines is not
    recognized.
    """
    elements: list[CodeElement] = []
    for idx, line in enumerate(source.lines):
        match = patterns.function.search(line)
        if not match:
            continue

        element = CodeElement(
            identity=element_identity(idx),
            origin_line=idx,
            raw_text=line,
            name=match.groupdict().get("name"),
        )
        logger.debug(f"Found {element.identity} ({element.name}): {line.strip()}")
        elements.append(element)

    return elements
