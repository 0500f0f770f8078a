"""Tree serialization and deserialization for jastx.

Provides round-trip serialization of ``Node`` trees to and from JSON and
YAML.  The serialized form is a plain dict/list structure that maps
naturally to both formats, so any front-end that can emit JSON or YAML can
hand trees to the renderer::

    {"kind": "var:declaration-list",
     "props": {"declaration_kind": "const"},
     "children": [{"kind": "var:declaration", "children": [...]}]}

``props``, ``children`` and ``docs`` are omitted when empty.

Usage
-----
::

    from jastx.ast.serializer import NodeSerializer

    serializer = NodeSerializer()
    data = serializer.to_dict(tree)
    json_text = serializer.to_json(tree)
    tree2 = serializer.from_json(json_text)
    assert tree == tree2
"""
from __future__ import annotations

import json
import logging

import yaml

from jastx.ast.nodes import Node
from jastx.validator.errors import NodeValidationError

logger = logging.getLogger(__name__)


class TreeFormatError(ValueError):
    """Raised when a serialized tree document is not shaped like a tree."""

    def __init__(self, message: str, path: str) -> None:
        self.path = path
        super().__init__(f"{message} at {path}")


class NodeSerializer:
    """Converts between ``Node`` trees and plain Python dicts.

    Deserialization builds nodes bottom-up, so every node is validated on
    the way in.  A rejected node re-raises its ``NodeValidationError``
    relocated to the node's path within the document.
    """

    # ------------------------------------------------------------------
    # Serialization (tree → dict)
    # ------------------------------------------------------------------

    def to_dict(self, node: Node) -> dict[str, object]:
        """Serialize a ``Node`` tree to a JSON-compatible dict."""
        data: dict[str, object] = {"kind": node.kind.value}
        if node.props:
            data["props"] = {
                name: list(value) if isinstance(value, tuple) else value
                for name, value in node.props.items()
            }
        if node.children:
            data["children"] = [self.to_dict(child) for child in node.children]
        if node.docs is not None:
            data["docs"] = self.to_dict(node.docs)
        return data

    # ------------------------------------------------------------------
    # Deserialization (dict → tree)
    # ------------------------------------------------------------------

    def from_dict(self, data: object) -> Node:
        """Deserialize a ``Node`` tree from a plain dict.

        Raises
        ------
        TreeFormatError
            If the document is not a mapping-based tree.
        NodeValidationError
            If any node violates its kind's contract.
        """
        return self._node_from_dict(data, "$")

    def _node_from_dict(self, data: object, path: str) -> Node:
        if not isinstance(data, dict):
            raise TreeFormatError(f"Expected a mapping, got {type(data).__name__}", path)
        if "kind" not in data:
            raise TreeFormatError("Node is missing its 'kind'", path)
        unknown = set(data) - {"kind", "props", "children", "docs"}
        if unknown:
            raise TreeFormatError(f"Unexpected node fields {sorted(unknown)}", path)

        props = data.get("props") or {}
        if not isinstance(props, dict):
            raise TreeFormatError("'props' must be a mapping", path)
        raw_children = data.get("children") or []
        if not isinstance(raw_children, list):
            raise TreeFormatError("'children' must be a list", path)

        children = tuple(
            self._node_from_dict(child, f"{path}.children[{index}]")
            for index, child in enumerate(raw_children)
        )
        docs = None
        if data.get("docs") is not None:
            docs = self._node_from_dict(data["docs"], f"{path}.docs")

        try:
            return Node(kind=data["kind"], props=props, children=children, docs=docs)
        except NodeValidationError as exc:
            raise exc.at(path) from None

    # ------------------------------------------------------------------
    # JSON helpers
    # ------------------------------------------------------------------

    def to_json(self, node: Node, indent: int = 2) -> str:
        """Serialize a ``Node`` tree to a JSON string."""
        return json.dumps(self.to_dict(node), indent=indent, ensure_ascii=False)

    def from_json(self, text: str) -> Node:
        """Deserialize a ``Node`` tree from a JSON string."""
        data: object = json.loads(text)
        node = self.from_dict(data)
        logger.debug("Loaded %s tree from JSON", node.kind.value)
        return node

    # ------------------------------------------------------------------
    # YAML helpers
    # ------------------------------------------------------------------

    def to_yaml(self, node: Node) -> str:
        """Serialize a ``Node`` tree to a YAML string."""
        return yaml.dump(
            self.to_dict(node), default_flow_style=False, allow_unicode=True, sort_keys=False
        )

    def from_yaml(self, text: str) -> Node:
        """Deserialize a ``Node`` tree from a YAML string."""
        data: object = yaml.safe_load(text)
        node = self.from_dict(data)
        logger.debug("Loaded %s tree from YAML", node.kind.value)
        return node
