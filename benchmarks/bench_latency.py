"""Benchmark: jastx render and tree-validation latency (p50/p95/mean).

Measures per-call latency for rendering and for a full-tree validation
pass over the same sample tree used by bench_throughput.
"""
from __future__ import annotations

import json
import sys
import time
from collections.abc import Callable
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

import jastx
from bench_throughput import build_sample_tree

_WARMUP: int = 100
_ITERATIONS: int = 3_000


def _measure(operation: str, call: Callable[[], object]) -> dict[str, object]:
    for _ in range(_WARMUP):
        call()

    latencies_ms: list[float] = []
    for _ in range(_ITERATIONS):
        t0 = time.perf_counter()
        call()
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": operation,
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p50_ms": round(sorted_lats[int(n * 0.50)], 4),
        "p95_ms": round(sorted_lats[min(int(n * 0.95), n - 1)], 4),
    }
    print(
        f"[bench_latency] {result['operation']}: "
        f"p50={result['p50_ms']:.4f}ms  p95={result['p95_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def bench_render_latency() -> dict[str, object]:
    """Benchmark per-call render latency.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_ms, p95_ms.
    """
    tree = build_sample_tree()
    return _measure("jastx_render_latency", lambda: jastx.render(tree))


def bench_validate_tree_latency() -> dict[str, object]:
    """Benchmark per-call latency of a full-tree validation pass.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p50_ms, p95_ms.
    """
    tree = build_sample_tree()
    return _measure("jastx_validate_tree_latency", lambda: jastx.validate(tree))


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    for bench_fn, fname in [
        (bench_render_latency, "render_latency_baseline.json"),
        (bench_validate_tree_latency, "validate_tree_latency_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
