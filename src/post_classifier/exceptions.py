"""Error types raised by the classifier and its corpus reader.

Each error also derives from the builtin exception a caller would expect
for the same failure, so ``except OSError`` or ``except KeyError`` keeps
working alongside ``except PostClassifierError``.
"""

from __future__ import annotations

from pathlib import Path


class PostClassifierError(Exception):
    """Base class for all post-classifier errors."""


class CorpusOpenError(PostClassifierError, OSError):
    """The corpus file could not be opened for reading."""

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        message = f"Error opening file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class MalformedCorpusError(PostClassifierError, ValueError):
    """The corpus header or a row does not match the expected columns."""

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        line: int | None = None,
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.line = line
        location = ""
        if path is not None:
            location = f"{path}"
            if line is not None:
                location += f":{line}"
            location += ": "
        super().__init__(f"{location}{message}")


class UnknownTagError(PostClassifierError, KeyError):
    """A per-tag query named a tag that never appeared in training."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Tag not found in training data: {tag!r}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class EmptyModelError(PostClassifierError, RuntimeError):
    """Prediction was requested from a model with no trained tags."""

    def __init__(self, message: str = "Classifier has no trained tags. Call train() first.") -> None:
        super().__init__(message)
