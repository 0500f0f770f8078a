#!/usr/bin/env python3
"""Example: jastx Validation

Demonstrates construction-time rejection of invalid nodes, tree-wide
warnings in normal and strict modes, and interpreting diagnostics.

Usage:
    python examples/02_validation.py

Requirements:
    pip install jastx
"""
from __future__ import annotations

import jastx
from jastx.ast import NodeSerializer
from jastx.validator import Diagnostic, NodeValidationError

INVALID_DOCUMENT = {
    "kind": "var:declaration-list",
    "props": {"declaration_kind": "let"},
    "children": [
        {
            "kind": "var:declaration",
            "children": [{"kind": "l:string", "props": {"value": "not a name"}}],
        }
    ],
}


def print_diagnostics(label: str, diagnostics: list[Diagnostic]) -> None:
    print(f"\n{label} ({len(diagnostics)} diagnostics):")
    if not diagnostics:
        print("  No issues found.")
        return
    for diag in diagnostics:
        print(f"  {diag}")


def main() -> None:
    print(f"jastx version: {jastx.__version__}")

    # A const without an initializer is constructible but draws a warning
    decl = jastx.node("var:declaration", jastx.node("ident", name="pending"))
    tree = jastx.node("var:declaration-list", decl, declaration_kind="const")
    print_diagnostics("Uninitialized const (normal mode)", jastx.validate(tree))
    print_diagnostics("Uninitialized const (strict mode)", jastx.validate(tree, strict=True))

    # Invalid nodes are never constructed
    try:
        jastx.node("l:regex", pattern="a+", flags="gg")
    except NodeValidationError as error:
        print_diagnostics("Duplicate regex flag", list(error.diagnostics))

    # Documents report the path of the rejected node
    try:
        NodeSerializer().from_dict(INVALID_DOCUMENT)
    except NodeValidationError as error:
        print(f"\nRejected document node at {error.path}:")
        print_diagnostics("Document errors", list(error.errors))


if __name__ == "__main__":
    main()
