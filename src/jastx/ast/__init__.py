"""jastx AST module.

Exports the ``Node`` model and the serializer for converting trees to and
from JSON/YAML.
"""
from __future__ import annotations

from jastx.ast.nodes import Node, PropValue
from jastx.ast.serializer import NodeSerializer, TreeFormatError

__all__ = [
    "Node",
    "PropValue",
    "NodeSerializer",
    "TreeFormatError",
]
