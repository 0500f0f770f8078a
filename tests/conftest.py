"""Shared test fixtures for jastx.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from jastx.ast.nodes import Node


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "jastx"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def destructuring_tree() -> Node:
    """``const {zz,qq=10}={zz:"test",qq:30},[a1,a2=10]=["test",30]``."""
    n = Node.create
    object_pattern = n(
        "bind:object",
        n("ident", name="zz"),
        n(
            "bind:object-elem",
            n("ident", name="qq"),
            n("l:number", value=10),
            mode="initializer",
        ),
    )
    object_value = n(
        "l:object",
        n("l:object-prop", n("ident", name="zz"), n("l:string", value="test")),
        n("l:object-prop", n("ident", name="qq"), n("l:number", value=30)),
    )
    array_pattern = n(
        "bind:array",
        n("ident", name="a1"),
        n("bind:array-elem", n("ident", name="a2"), n("l:number", value=10)),
    )
    array_value = n("l:array", n("l:string", value="test"), n("l:number", value=30))
    return n(
        "var:declaration-list",
        n("var:declaration", object_pattern, object_value),
        n("var:declaration", array_pattern, array_value),
        declaration_kind="const",
    )
