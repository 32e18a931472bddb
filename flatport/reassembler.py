"""Emit ordered functions as marker-annotated text."""

from flatport.models import CodeElement, SourceText

DEFAULT_MARKER_FORMAT = "// Function start: {identity}"


def reassemble(
    order: list[str],
    elements: list[CodeElement],
    marker_format: str = DEFAULT_MARKER_FORMAT,
) -> SourceText:
    """Write a marker line and the raw definition line for each ordered element.

    Lines that were not detected as elements are not reproduced.
    """
    by_identity = {element.identity: element for element in elements}

    lines: list[str] = []
    for identity in order:
        element = by_identity.get(identity)
        if element is None:
            raise ValueError(f"No element with identity {identity}")
        lines.append(marker_format.format(identity=element.identity, name=element.name or ""))
        lines.append(element.raw_text)

    return SourceText(lines=tuple(lines))
