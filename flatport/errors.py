"""Errors raised while preprocessing a source file."""

from pathlib import Path


class PreprocessError(Exception):
    """Base class for failures that stop a preprocessing run."""


class SourceIOError(PreprocessError):
    """Raised when the input cannot be read or the output cannot be written."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class MissingIncludeError(PreprocessError):
    """An included file could not be read.

    The inliner never raises this; it is collected as a warning and the
    include line is dropped.
    """

    def __init__(self, target: str, reason: str = "not found"):
        self.target = target
        self.reason = reason
        super().__init__(f"Header file '{target}' {reason}. Skipping include.")


class CycleDetected(PreprocessError):
    """Raised when the dependency graph cannot be ordered."""

    def __init__(self, nodes: list[str]):
        self.nodes = list(nodes)
        super().__init__(f"Cycle detected in dependencies: {', '.join(self.nodes)}")


class PatternCompilationError(PreprocessError):
    """Raised when a recognition pattern is not a valid regular expression."""

    def __init__(self, pattern_name: str, pattern: str, reason: str):
        self.pattern_name = pattern_name
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid {pattern_name} pattern {pattern!r}: {reason}")
