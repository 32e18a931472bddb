"""Run the preprocessing stages in order and handle file I/O."""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from flatport.config import PreprocessConfig
from flatport.errors import MissingIncludeError, SourceIOError
from flatport.extractor import extract_elements
from flatport.graph import build_dependency_graph, topological_sort
from flatport.inliner import inline_includes
from flatport.macros import transform_macros
from flatport.models import CodeElement, SourceText, read_source_file
from flatport.patterns import Patterns
from flatport.reassembler import reassemble

logger = logging.getLogger(__name__)


class PreprocessResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    output: SourceText
    elements: list[CodeElement]
    order: list[str]
    warnings: list[MissingIncludeError] = Field(default_factory=list)
    output_file: Path | None = None


def read_source(path: Path) -> SourceText:
    try:
        return SourceText.from_text(read_source_file(path))
    except (OSError, UnicodeDecodeError) as e:
        raise SourceIOError(path, f"could not read input ({e})") from e


def write_output(path: Path, source: SourceText) -> None:
    try:
        path.write_text(source.render(), encoding="utf-8")
    except OSError as e:
        raise SourceIOError(path, f"could not write output ({e})") from e


def run_stages(
    source: SourceText,
    patterns: Patterns,
    search_dirs: list[Path],
    marker_format: str,
) -> PreprocessResult:
    """Inline, extract, order, reassemble and rewrite macros.

    Raises CycleDetected if the elements cannot be ordered.
    """
    inlined = inline_includes(source, search_dirs, patterns)
    logger.info(
        f"Inlined {len(inlined.inlined)} include(s), skipped {len(inlined.warnings)}; "
        f"{len(inlined.source)} lines"
    )

    elements = extract_elements(inlined.source, patterns)
    logger.info(f"Detected {len(elements)} function definition(s)")

    graph = build_dependency_graph(elements)
    order = topological_sort(graph).unwrap()
    logger.debug(f"Order: {order}")

    reassembled = reassemble(order, elements, marker_format)
    output = transform_macros(reassembled, patterns)

    return PreprocessResult(
        output=output,
        elements=elements,
        order=order,
        warnings=inlined.warnings,
    )


def preprocess_text(text: str, config: PreprocessConfig | None = None) -> PreprocessResult:
    """Preprocess in-memory source; includes resolve against `config.search_dirs()`."""
    config = config or PreprocessConfig()
    patterns = config.compile_patterns()
    return run_stages(
        SourceText.from_text(text), patterns, config.search_dirs(), config.marker_format
    )


def preprocess(config: PreprocessConfig, write: bool = True) -> PreprocessResult:
    """Preprocess `config.input_file` and write `config.output_file`.

    Patterns are compiled before any file is touched. Nothing is written when
    a stage fails.
    """
    patterns = config.compile_patterns()

    logger.info(f"Reading {config.input_file}")
    source = read_source(config.input_file)

    result = run_stages(source, patterns, config.search_dirs(), config.marker_format)

    if write:
        write_output(config.output_file, result.output)
        logger.info(f"Wrote {len(result.output)} lines to {config.output_file}")
        result.output_file = config.output_file

    return result
