"""Pytest hooks to generate test-vector fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

_VECTOR_CASES: dict[str, list[dict[str, Any]]] = {}


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--output",
        action="store",
        default=None,
        help="Output directory for generated fixtures",
    )


@pytest.fixture
def vector_test_group() -> Callable[[str, dict[str, Any]], None]:
    """Collect pre-built test_vectors under a specific fixture path."""

    def _vector_test_group(rel_path: str, vector: dict[str, Any]) -> None:
        _VECTOR_CASES.setdefault(rel_path, []).append(vector)

    return _vector_test_group


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    output_dir = session.config.getoption("--output")
    if not output_dir:
        return

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    for rel_path, vectors in _VECTOR_CASES.items():
        if not vectors:
            continue
        target = out / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps({"test_vectors": vectors}, indent=2))
