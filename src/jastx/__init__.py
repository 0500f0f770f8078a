"""jastx — JavaScript/TypeScript syntax tree toolkit: taxonomy, validator, renderer.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import jastx

    # Build a tree bottom-up; every node is validated as it is created
    decl = jastx.node(
        "var:declaration",
        jastx.node("ident", name="x"),
        jastx.node("t:primitive", name="string"),
        jastx.node("l:string", value="Hello"),
    )
    tree = jastx.node("var:declaration-list", decl, declaration_kind="const")

    # Render to source text
    jastx.render(tree)
    'const x:string="Hello"'

    # Collect warnings for a whole tree
    diagnostics = jastx.validate(tree)

    # Round-trip through the interchange format
    same = jastx.from_dict(jastx.to_dict(tree))

    jastx.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from jastx.ast.nodes import Node, PropValue
    from jastx.taxonomy.kinds import Kind
    from jastx.validator.diagnostics import Diagnostic


def node(
    kind: "Kind | str",
    *children: "Node",
    docs: "Node | None" = None,
    **props: "PropValue",
) -> "Node":
    """Create a validated node.

    Parameters
    ----------
    kind:
        A ``Kind`` or its tag string, e.g. ``"l:number"``.
    *children:
        The node's children, in order.
    docs:
        Optional ``text`` node rendered as a leading doc comment.
    **props:
        Kind-specific properties.

    Raises
    ------
    jastx.validator.NodeValidationError
        If the node violates its kind's contract.
    """
    from jastx.ast.nodes import Node

    return Node.create(kind, *children, docs=docs, **props)


def render(root: "Node") -> str:
    """Render a tree to single-line source text.

    Parameters
    ----------
    root:
        The root node of the tree.

    Returns
    -------
    str
        The rendered source text.
    """
    from jastx.renderer.renderer import render as _render

    return _render(root)


def validate(root: "Node", strict: bool = False) -> list["Diagnostic"]:
    """Re-check every node of a tree and return all findings.

    Parameters
    ----------
    root:
        The root node of the tree.
    strict:
        When ``True``, warnings are promoted to errors.

    Returns
    -------
    list[Diagnostic]
        All findings, each carrying the path of its node.
    """
    from jastx.validator.validator import Validator

    return Validator(strict=strict).validate_tree(root)


def to_dict(root: "Node") -> dict[str, Any]:
    """Serialize a tree to its plain-dict interchange form."""
    from jastx.ast.serializer import NodeSerializer

    return NodeSerializer().to_dict(root)


def from_dict(data: dict[str, Any]) -> "Node":
    """Build a validated tree from its plain-dict interchange form.

    Raises
    ------
    jastx.ast.TreeFormatError
        If the document is not shaped like a tree.
    jastx.validator.NodeValidationError
        If a node is rejected; the error carries the node's path.
    """
    from jastx.ast.serializer import NodeSerializer

    return NodeSerializer().from_dict(data)


__all__ = [
    "__version__",
    "node",
    "render",
    "validate",
    "to_dict",
    "from_dict",
]
