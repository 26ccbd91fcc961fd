from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from evals.runner import load_dataset, run_pointer_case  # noqa: E402


def _case_id(case: dict) -> str:
    name = case.get("name")
    return str(name) if name else "<unnamed>"


_DATASETS = _ROOT / "evals" / "datasets"

_RFC6901_DATASET = load_dataset(_DATASETS / "rfc6901_v1.yaml")


@pytest.mark.parametrize("case", _RFC6901_DATASET["cases"], ids=_case_id)
def test_eval_dataset_rfc6901(case: dict) -> None:
    result = run_pointer_case(case, _RFC6901_DATASET["documents"])
    assert result.passed, "\n".join(
        [f"case={result.name}"] + result.errors + [f"output={result.output!r}"]
    )
