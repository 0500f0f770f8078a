"""Construction error raised when a proposed node fails validation."""
from __future__ import annotations

from dataclasses import dataclass, replace

from jastx.validator.diagnostics import Diagnostic


@dataclass(frozen=True)
class NodeValidationError(Exception):
    """A proposed node violated its kind's property or child contract.

    The node is never constructed.  ``diagnostics`` holds every finding for
    the rejected node (errors and any warnings), each carrying the kind,
    child position, and expected vs. found values.

    Parameters
    ----------
    kind:
        Tag of the rejected node, as supplied by the caller.
    diagnostics:
        The findings that caused the rejection.
    path:
        Location of the rejected node inside the tree being built.
    """

    kind: str
    diagnostics: tuple[Diagnostic, ...]
    path: str = "$"

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.is_error)

    def __str__(self) -> str:
        lines = [
            f"Invalid {self.kind!r} node at {self.path} "
            f"({len(self.errors)} error(s)):"
        ]
        for diagnostic in self.diagnostics:
            lines.append(f"  {diagnostic}")
        return "\n".join(lines)

    def at(self, path: str) -> "NodeValidationError":
        """Return a copy of this error relocated to ``path``."""
        return replace(
            self,
            path=path,
            diagnostics=tuple(d.at(path) for d in self.diagnostics),
        )

    # dataclass(frozen=True) doesn't call Exception.__init__ automatically
    def __post_init__(self) -> None:
        object.__setattr__(self, "args", (str(self),))
