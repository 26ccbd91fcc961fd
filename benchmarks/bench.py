from __future__ import annotations

import argparse
import json
import platform
import statistics
import time
from collections.abc import Callable
from typing import Any, NamedTuple

import pydantic
from pydantic import TypeAdapter

from rfcpointer import JsonPointer, JsonReference, locate_child, resolve_as
from rfcpointer.types import LocateOptions


class BenchResult(NamedTuple):
    name: str
    iters: int
    seconds_per_iter: float


def _run_bench(
    name: str,
    fn: Callable[[], object],
    *,
    target_total_seconds: float = 0.25,
    repeats: int = 7,
    max_iters: int = 1_000_000,
) -> BenchResult:
    iters = 1
    while True:
        start = time.perf_counter()
        for _ in range(iters):
            fn()
        elapsed = time.perf_counter() - start
        if elapsed >= target_total_seconds:
            break
        if iters >= max_iters:
            break
        iters *= 2

    per_iter_samples: list[float] = []
    for _ in range(repeats):
        start = time.perf_counter()
        for _ in range(iters):
            fn()
        elapsed = time.perf_counter() - start
        per_iter_samples.append(elapsed / iters)

    return BenchResult(name=name, iters=iters, seconds_per_iter=statistics.median(per_iter_samples))


def _fmt_seconds(s: float) -> str:
    if s < 1e-6:
        return f"{s * 1e9:.1f} ns"
    if s < 1e-3:
        return f"{s * 1e6:.1f} µs"
    if s < 1:
        return f"{s * 1e3:.3f} ms"
    return f"{s:.3f} s"


def _print_table(results: list[BenchResult]) -> None:
    name_w = max(len(r.name) for r in results)
    it_w = max(len(str(r.iters)) for r in results)
    print(
        f"{'scenario'.ljust(name_w)}  {'iters'.rjust(it_w)}  {'median/op'.rjust(12)}  {'ops/s'.rjust(12)}"
    )
    print(f"{'-' * name_w}  {'-' * it_w}  {'-' * 12}  {'-' * 12}")
    for r in results:
        ops = 1.0 / r.seconds_per_iter if r.seconds_per_iter else float("inf")
        print(
            f"{r.name.ljust(name_w)}  {str(r.iters).rjust(it_w)}  {str(_fmt_seconds(r.seconds_per_iter)).rjust(12)}  {ops:12.0f}"
        )


def _document(width: int, depth: int) -> dict[str, Any]:
    """A tree ``depth`` levels deep with ``width`` keys and a list at each level."""
    node: dict[str, Any] = {"leaf": "x", "items": list(range(width))}
    for level in range(depth):
        node = {f"k{i}": {"n": i} for i in range(width)} | {"next": node, "level": level}
    return node


def main() -> None:
    parser = argparse.ArgumentParser(description="Microbenchmarks for rfcpointer.")
    parser.add_argument("--target-seconds", type=float, default=0.25)
    parser.add_argument("--repeats", type=int, default=7)
    parser.add_argument("--depth", type=int, default=12)
    parser.add_argument("--width", type=int, default=16)
    args = parser.parse_args()

    doc = _document(args.width, args.depth)
    doc_json = json.dumps(doc)
    deep_path = "/next" * args.depth + "/items/3"
    deep = JsonPointer.parse(deep_path)
    target = deep.parent().resolve(doc)
    adapter = TypeAdapter(list[int])

    def parse_deep() -> object:
        return JsonPointer.parse(deep_path)

    def to_uri_fragment_deep() -> object:
        return deep.to_uri_fragment()

    def resolve_deep() -> object:
        return deep.resolve(doc)

    def exists_missing() -> object:
        return deep.parent().child("missing").exists(doc)

    def rewalk_each_level() -> object:
        # Resolve every prefix from the root, as a caller without references would.
        pointer = JsonPointer()
        value = None
        for token in deep:
            pointer = pointer.child(token)
            value = pointer.resolve(doc)
        return value

    def reference_descent() -> object:
        ref = JsonReference(doc)
        for token in deep:
            ref = ref.child(token)
        return ref.value

    def locate_list() -> object:
        return locate_child(doc, target, options=LocateOptions(warn_on_singletons=False))

    def resolve_as_list() -> object:
        return resolve_as(deep.parent(), doc, adapter)

    results: list[BenchResult] = []
    for name, fn in [
        (f"JsonPointer.parse depth={args.depth + 2}", parse_deep),
        ("JsonPointer.to_uri_fragment", to_uri_fragment_deep),
        ("resolve deep pointer", resolve_deep),
        ("exists (missing sibling)", exists_missing),
        ("re-walk from root at each level", rewalk_each_level),
        ("JsonReference.child descent", reference_descent),
        ("locate_child (identity DFS)", locate_list),
        ("resolve_as list[int] (TypeAdapter reuse)", resolve_as_list),
    ]:
        results.append(
            _run_bench(
                name,
                fn,
                target_total_seconds=args.target_seconds,
                repeats=args.repeats,
            )
        )

    print("Environment")
    print(f"- python: {platform.python_version()} ({platform.python_implementation()})")
    print(f"- platform: {platform.platform()}")
    print(f"- pydantic: {pydantic.__version__}")
    print(f"- document: {len(doc_json)} bytes of JSON, depth={args.depth}, width={args.width}")
    print()

    _print_table(results)


if __name__ == "__main__":
    main()
