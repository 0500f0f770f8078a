"""Renderer exception types."""
from __future__ import annotations


class UnrenderableNodeError(RuntimeError):
    """Raised when the renderer has no handler for a node's kind.

    Validated trees always render, so this signals an internal
    inconsistency between the taxonomy and the renderer, not bad input.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(
            f"No renderer is registered for node kind {kind!r}. "
            "Every kind in the taxonomy must have a render handler."
        )
