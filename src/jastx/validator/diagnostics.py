"""Diagnostic types for the jastx validator.

A ``Diagnostic`` is a structured finding about one proposed node: which
kind was being built, which child position (if any) is at fault, what was
expected and what was found.  Diagnostics with ERROR severity prevent the
node from being constructed.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostics, aligned with LSP conventions."""

    ERROR = auto()
    WARNING = auto()
    INFORMATION = auto()
    HINT = auto()


@dataclass(frozen=True)
class Diagnostic:
    """A single validation finding.

    Parameters
    ----------
    severity:
        How serious this finding is.
    code:
        A short machine-readable identifier, e.g. ``"JSX006"``.
    message:
        Human-readable description of the problem.
    kind:
        Tag of the node being validated, e.g. ``"var:declaration"``.
    position:
        0-based index of the offending child, or ``None`` when the finding
        concerns the node's properties or the node as a whole.
    expected:
        What was admissible at the failing location (kind tags, property
        values, or types).
    found:
        What was actually supplied, if anything.
    suggestion:
        Optional human-readable fix suggestion.
    rule:
        The rule name that produced this diagnostic.
    path:
        Location of the node inside the tree being built, ``"$"`` for the
        node itself.
    """

    severity: DiagnosticSeverity
    code: str
    message: str
    kind: str
    position: int | None = field(default=None)
    expected: tuple[str, ...] = field(default=())
    found: str | None = field(default=None)
    suggestion: str | None = field(default=None)
    rule: str = field(default="")
    path: str = field(default="$")

    def __str__(self) -> str:
        loc = self.path if self.position is None else f"{self.path}.children[{self.position}]"
        prefix = f"[{self.code}] {self.severity.name}"
        suggestion_part = f" (hint: {self.suggestion})" if self.suggestion else ""
        return f"{prefix} at {loc} ({self.kind}): {self.message}{suggestion_part}"

    @property
    def is_error(self) -> bool:
        """Return True if this diagnostic blocks node construction."""
        return self.severity == DiagnosticSeverity.ERROR

    def at(self, path: str) -> "Diagnostic":
        """Return a copy of this diagnostic relocated to ``path``."""
        return replace(self, path=path)
