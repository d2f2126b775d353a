"""Semantic errors, their source locations, and error reports."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, TextIO, overload


@dataclass(frozen=True)
class TextRange:
    """A half-open range ``start..end`` of character offsets into a source."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid text range {self.start}..{self.end}")

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class SyntaxSpan:
    """The text of a syntax node and where it lies in its source."""

    text: str
    range: TextRange


class SemanticErrorKind(Enum):
    """Kinds of semantic error."""

    UNDEF_VAR_ERROR = "UndefVarError"
    UNDEF_GATE_ERROR = "UndefGateError"
    REDECLARATION_ERROR = "RedeclarationError"
    CONST_INTEGER_ERROR = "ConstIntegerError"
    INCOMPATIBLE_TYPES_ERROR = "IncompatibleTypesError"
    MUTATE_CONST_ERROR = "MutateConstError"
    INCLUDE_NOT_IN_GLOBAL_SCOPE_ERROR = "IncludeNotInGlobalScopeError"
    RETURN_IN_GLOBAL_SCOPE_ERROR = "ReturnInGlobalScopeError"
    NUM_GATE_PARAMS_ERROR = "NumGateParamsError"
    NUM_GATE_QUBITS_ERROR = "NumGateQubitsError"


@dataclass(frozen=True)
class SemanticError:
    """A semantic error of some kind located at a syntax node."""

    kind: SemanticErrorKind
    node: SyntaxSpan

    @property
    def range(self) -> TextRange:
        """The location of the offending node."""
        return self.node.range

    def message(self) -> str:
        """Return the error message: the name of the error kind."""
        return self.kind.value

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.node.text}, {self.node.range}"


def report_error(message: str, span: TextRange, file_path: str, source: str) -> str:
    """Return a compact report of an error at ``span`` in ``source``."""
    start = min(span.start, len(source))
    end = min(span.end, len(source))
    line_start = source.rfind("\n", 0, start) + 1
    line_end = source.find("\n", start)
    if line_end == -1:
        line_end = len(source)
    line_no = source.count("\n", 0, start) + 1
    col = start - line_start + 1
    width = max(1, min(end, line_end) - start)
    pad = " " * len(str(line_no))
    lines = [
        f"Error: {message}",
        f"{pad}--> {file_path}:{line_no}:{col}",
        f"{pad} |",
        f"{line_no} | {source[line_start:line_end]}",
        f"{pad} | {' ' * (col - 1)}{'^' * width} Near this point",
    ]
    return "\n".join(lines) + "\n"


@dataclass
class SemanticErrorList:
    """Errors found in one source, plus those of the files it includes."""

    source_file_path: Path
    errors: list[SemanticError] = field(default_factory=list)
    include_errors: list["SemanticErrorList"] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.source_file_path = Path(self.source_file_path)

    def insert(self, error_kind: SemanticErrorKind, node: SyntaxSpan) -> None:
        """Record an error of kind ``error_kind`` at ``node``."""
        self.errors.append(SemanticError(error_kind, node))

    def push_included(self, errors: "SemanticErrorList") -> None:
        """Attach the errors found in an included file."""
        self.include_errors.append(errors)

    def any_semantic_errors(self) -> bool:
        """Return True if this source or any included source has errors."""
        return bool(self.errors) or any(
            inclusion.any_semantic_errors() for inclusion in self.include_errors
        )

    def format_errors(self, source: str | None = None) -> str:
        """Return reports for all errors, included files last.

        ``source`` is the text of the top-level source; when omitted it is
        read from ``source_file_path``. Included sources are read from
        their files.
        """
        parts: list[str] = []
        if self.errors:
            if source is None:
                source = self.source_file_path.read_text(encoding="utf-8")
            path_str = str(self.source_file_path)
            for err in self.errors:
                parts.append(report_error(err.message(), err.range, path_str, source))
                parts.append("\n")
        for inclusion in self.include_errors:
            parts.append(inclusion.format_errors())
        return "".join(parts)

    def print_errors(self, source: str | None = None, file: TextIO | None = None) -> None:
        """Write the reports from `format_errors` to ``file`` (default stdout)."""
        out = sys.stdout if file is None else file
        out.write(self.format_errors(source))

    def __iter__(self) -> Iterator[SemanticError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    @overload
    def __getitem__(self, index: int) -> SemanticError: ...

    @overload
    def __getitem__(self, index: slice) -> list[SemanticError]: ...

    def __getitem__(self, index):
        return self.errors[index]