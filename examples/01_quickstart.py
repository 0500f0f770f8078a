#!/usr/bin/env python3
"""Example: Quickstart — jastx

Minimal working example: build a declaration tree bottom-up, render it,
validate it, and round-trip it through the JSON interchange format.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install jastx
"""
from __future__ import annotations

import jastx
from jastx.ast import Node, NodeSerializer


def build_tree() -> Node:
    n = jastx.node
    return n(
        "var:declaration-list",
        n(
            "var:declaration",
            n("ident", name="x"),
            n("t:primitive", name="string"),
            n("l:string", value="Hello"),
        ),
        n(
            "var:declaration",
            n("ident", name="y"),
            n("t:primitive", name="number"),
            n("expr:as", n("l:number", value=10), n("t:primitive", name="number")),
        ),
        n("var:declaration", n("ident", name="z"), n("l:object")),
        declaration_kind="const",
    )


def main() -> None:
    print(f"jastx version: {jastx.__version__}")

    # Step 1: Build a tree; each node is validated as it is created
    tree = build_tree()
    print(f"Built {tree!r} with {sum(1 for _ in tree.walk())} nodes")

    # Step 2: Render to source text
    print(f"Rendered: {jastx.render(tree)}")

    # Step 3: Re-check the whole tree
    diagnostics = jastx.validate(tree)
    print(f"Validation: {len(diagnostics)} finding(s)")

    # Step 4: Round-trip through JSON
    serializer = NodeSerializer()
    text = serializer.to_json(tree)
    restored = serializer.from_json(text)
    print(f"JSON document: {len(text)} chars, round trip equal: {restored == tree}")


if __name__ == "__main__":
    main()
