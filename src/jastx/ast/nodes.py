"""Tree node model for jastx.

A ``Node`` is a frozen dataclass: a ``Kind`` tag, a read-only property
bag, an ordered tuple of children and an optional leading ``text`` node
used as documentation.  Every node is validated in ``__post_init__``, so a
``Node`` instance that exists is structurally well-formed and safe to
render.  Trees are built bottom-up: children must exist before their
parent, which makes cycles unconstructable.

Example
-------
::

    from jastx.ast import Node

    decl = Node.create(
        "var:declaration",
        Node.create("ident", name="x"),
        Node.create("l:number", value=1),
    )
    stmt = Node.create("var:declaration-list", decl, declaration_kind="let")
    stmt.render()  # 'let x=1'
"""
from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Union

from jastx.taxonomy.kinds import Kind
from jastx.validator.validator import default_validator

PropValue = Union[str, int, float, bool, tuple[str, ...]]


def _freeze(value: object) -> object:
    """Turn list-valued properties into tuples so nodes stay immutable."""
    if isinstance(value, list):
        return tuple(value)
    return value


@dataclass(frozen=True, slots=True)
class Node:
    """An immutable, validated tree node.

    Parameters
    ----------
    kind:
        The node's ``Kind``, or its tag string (``"l:string"``).
    props:
        Kind-specific properties, e.g. ``name`` for ``ident`` or
        ``declaration_kind`` for ``var:declaration-list``.
    children:
        Ordered child nodes; their count and kinds are fixed by ``kind``.
    docs:
        Optional ``text`` node rendered as a leading doc comment.

    Raises
    ------
    NodeValidationError
        If the proposed node violates its kind's contract.
    """

    kind: Kind
    props: Mapping[str, PropValue] = field(default_factory=dict, hash=False)
    children: tuple["Node", ...] = ()
    docs: "Node | None" = None

    def __post_init__(self) -> None:
        props = {name: _freeze(value) for name, value in dict(self.props or {}).items()}
        children = tuple(self.children)
        default_validator().check(self.kind, props, children, self.docs)
        object.__setattr__(self, "kind", Kind.parse(self.kind))
        object.__setattr__(self, "props", MappingProxyType(props))
        object.__setattr__(self, "children", children)

    @classmethod
    def create(
        cls,
        kind: Kind | str,
        *children: "Node",
        docs: "Node | None" = None,
        **props: PropValue,
    ) -> "Node":
        """Build a node from positional children and keyword properties."""
        return cls(kind=kind, props=props, children=children, docs=docs)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        parts = [repr(self.kind.value)]
        parts.extend(f"{name}={value!r}" for name, value in self.props.items())
        if self.children:
            parts.append(f"children={len(self.children)}")
        if self.docs is not None:
            parts.append("docs=...")
        return f"Node({', '.join(parts)})"

    def prop(self, name: str, default: object = None) -> object:
        """Return property ``name``, or ``default`` when it is not set."""
        return self.props.get(name, default)

    def flag(self, name: str) -> bool:
        """Return True if boolean property ``name`` is set to ``True``."""
        return self.props.get(name) is True

    def with_docs(self, docs: "Node | None") -> "Node":
        """Return a copy of this node with different documentation."""
        return replace(self, docs=docs)

    def walk(self) -> Iterator["Node"]:
        """Yield this node and all descendants in pre-order (docs excluded)."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def render(self) -> str:
        """Render this tree to source text."""
        from jastx.renderer.renderer import render

        return render(self)
