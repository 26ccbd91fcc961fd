from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from rfcpointer import errors
from rfcpointer.pointer import JsonPointer

_ERROR_TYPES: dict[str, type[Exception]] = {name: getattr(errors, name) for name in errors.__all__}


def load_dataset(path: str | Path) -> dict[str, Any]:
    dataset_path = Path(path)
    with dataset_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict) or not isinstance(data.get("cases"), list):
        raise ValueError(f"Invalid dataset format: {dataset_path}")
    return data


def _parse_evaluator(item: Any) -> tuple[str, Any]:
    if isinstance(item, str):
        return item, True
    if isinstance(item, dict) and len(item) == 1:
        ((k, v),) = item.items()
        return str(k), v
    raise ValueError(f"Invalid evaluator: {item!r}")


def _safe_equals(actual: Any, expected: Any) -> bool:
    # Avoid common Python footgun where True == 1.
    if isinstance(expected, bool):
        return isinstance(actual, bool) and actual is expected
    if isinstance(expected, int) and isinstance(actual, bool):
        return False
    return actual == expected


def _preview(value: Any, *, limit: int = 200) -> str:
    try:
        s = repr(value)
    except Exception:
        s = f"<unrepr {type(value).__name__}>"
    if len(s) > limit:
        return s[:limit] + "…"
    return s


@dataclass(slots=True)
class EvalResult:
    name: str
    passed: bool
    errors: list[str]
    output: Any = None


def _case_pointer(name: str, inputs: dict[str, Any]) -> JsonPointer:
    if "pointer" in inputs:
        return JsonPointer.parse(str(inputs["pointer"]))
    if "fragment" in inputs:
        return JsonPointer.from_uri_fragment(str(inputs["fragment"]))
    raise ValueError(f"Case {name!r} needs inputs.pointer or inputs.fragment")


def run_pointer_case(case: dict[str, Any], documents: dict[str, Any]) -> EvalResult:
    name = str(case.get("name") or "<unnamed>")
    inputs = case.get("inputs") or {}
    if not isinstance(inputs, dict):
        raise ValueError(f"Case {name!r} has invalid inputs")

    doc_name = inputs.get("document")
    if doc_name is not None and doc_name not in documents:
        raise ValueError(f"Case {name!r} references unknown document {doc_name!r}")
    doc = documents.get(doc_name) if doc_name is not None else None

    pointer = _case_pointer(name, inputs)
    expected = case.get("expected_output")

    errors_: list[str] = []
    actual: Any = None
    raised: Exception | None = None
    if doc_name is not None:
        try:
            actual = pointer.resolve(doc)
        except errors.ResolutionError as exc:
            raised = exc

    for ev in case.get("evaluators") or []:
        ev_name, ev_params = _parse_evaluator(ev)

        if ev_name == "MatchesExpected":
            if not ev_params:
                continue
            if "expected_output" not in case:
                errors_.append("MatchesExpected: missing expected_output")
            elif raised is not None:
                errors_.append(f"MatchesExpected: resolution raised {raised!r}")
            elif not _safe_equals(actual, expected):
                errors_.append(
                    "MatchesExpected: resolved value did not match "
                    f"(expected={_preview(expected)}, actual={_preview(actual)})"
                )

        elif ev_name == "Exists":
            want = bool(ev_params)
            got = pointer.exists(doc)
            if got != want:
                errors_.append(f"Exists: expected {want}, got {got}")
            if got != (raised is None):
                errors_.append(f"Exists: disagrees with resolve (raised={raised!r})")

        elif ev_name == "RaisesError":
            want_type = _ERROR_TYPES.get(str(ev_params))
            if want_type is None:
                errors_.append(f"RaisesError: unknown error type {ev_params!r}")
            elif not isinstance(raised, want_type):
                errors_.append(f"RaisesError: expected {ev_params}, got {raised!r}")

        elif ev_name == "ErrorPointer":
            got_prefix = getattr(raised, "pointer", None)
            if got_prefix is None or str(got_prefix) != str(ev_params):
                errors_.append(f"ErrorPointer: expected {ev_params!r}, got {got_prefix!r}")

        elif ev_name == "PointerIs":
            if str(pointer) != str(ev_params):
                errors_.append(f"PointerIs: expected {ev_params!r}, got {str(pointer)!r}")

        elif ev_name == "FragmentIs":
            got_fragment = pointer.to_uri_fragment()
            if got_fragment != str(ev_params):
                errors_.append(f"FragmentIs: expected {ev_params!r}, got {got_fragment!r}")

        elif ev_name == "RoundTrips":
            if JsonPointer.parse(str(pointer)) != pointer:
                errors_.append(f"RoundTrips: string form {str(pointer)!r} does not round-trip")
            if JsonPointer.from_uri_fragment(pointer.to_uri_fragment()) != pointer:
                errors_.append(
                    f"RoundTrips: fragment {pointer.to_uri_fragment()!r} does not round-trip"
                )

        else:
            errors_.append(f"Unknown evaluator: {ev_name}")

    output = {
        "pointer": str(pointer),
        "value": _preview(actual),
        "error": None if raised is None else str(raised),
    }
    return EvalResult(name=name, passed=not errors_, errors=errors_, output=output)
