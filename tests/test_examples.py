import importlib
from pathlib import Path

import pytest
from syrupy import SnapshotAssertion  # type: ignore[attr-defined]

from examples._utils import run_examples

EXAMPLE_MODULES = [
    p.stem
    for p in (Path(__file__).parent.parent / "examples").iterdir()
    if p.suffix == ".py" and not p.name.startswith("_")
]


@pytest.mark.parametrize("example", EXAMPLE_MODULES)
async def test_examples(capsys: pytest.CaptureFixture[str], snapshot: SnapshotAssertion, example: str) -> None:
    await run_examples(importlib.import_module(f"examples.{example}"))

    assert capsys.readouterr().out == snapshot
