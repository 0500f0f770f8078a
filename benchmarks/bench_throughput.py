"""Benchmark: jastx tree construction and rendering throughput.

Measures how many trees can be built (and therefore validated) and how
many can be rendered per second using the public jastx.node() and
jastx.render() APIs.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import jastx
from jastx.ast.nodes import Node

_ITERATIONS: int = 2_000
_RENDER_ITERATIONS: int = 5_000


def _ident(name: str) -> Node:
    return jastx.node("ident", name=name)


def build_sample_tree() -> Node:
    """Build a small module-like tree: a documented async function with a
    typed parameter, a destructuring declaration and a conditional call."""
    n = jastx.node

    declarations = n(
        "var:statement",
        n(
            "var:declaration-list",
            n(
                "var:declaration",
                n(
                    "bind:object",
                    _ident("id"),
                    n("bind:object-elem", _ident("tags"), n("l:array"), mode="initializer"),
                ),
                _ident("options"),
            ),
            declaration_kind="const",
        ),
    )
    guard = n(
        "if-statement",
        n(
            "expr:binary",
            n("expr:prop-access", _ident("tags"), _ident("length")),
            n("l:number", value=0),
            operator=">",
        ),
        n(
            "expr:statement",
            n(
                "expr:await",
                n(
                    "expr:call",
                    n("expr:prop-access", _ident("store"), _ident("save")),
                    n("expr:template", _ident("id"), parts=["item:", ""]),
                    _ident("tags"),
                ),
            ),
        ),
    )
    return n(
        "function-declaration",
        _ident("persist"),
        n("param", _ident("options"), n("t:ref", _ident("Options"))),
        n("t:ref", _ident("Promise"), n("t:primitive", name="void")),
        n("block", declarations, guard),
        is_async=True,
        docs=n("text", value="Persist tagged items"),
    )


def _report(operation: str, iterations: int, total: float) -> dict[str, object]:
    result: dict[str, object] = {
        "operation": operation,
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1),
        "avg_latency_ms": round(total / iterations * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_construct_throughput() -> dict[str, object]:
    """Benchmark building (and validating) the sample tree.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        build_sample_tree()
    total = time.perf_counter() - start
    return _report("jastx_construct_throughput", _ITERATIONS, total)


def bench_render_throughput() -> dict[str, object]:
    """Benchmark rendering a prebuilt sample tree.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    tree = build_sample_tree()

    start = time.perf_counter()
    for _ in range(_RENDER_ITERATIONS):
        jastx.render(tree)
    total = time.perf_counter() - start
    return _report("jastx_render_throughput", _RENDER_ITERATIONS, total)


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    for bench_fn, fname in [
        (bench_construct_throughput, "construct_throughput_baseline.json"),
        (bench_render_throughput, "render_throughput_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
