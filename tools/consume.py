"""Consume fixtures and validate against Python specs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
import sys
from typing import Any, Callable, Optional

import click

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))

from starknet_spec.commitments.state_diff import calculate_state_diff_hash  # noqa: E402
from starknet_spec.core import ChainId  # noqa: E402
from starknet_spec.crypto.hash import pedersen, poseidon_many, starknet_keccak  # noqa: E402
from starknet_spec.crypto.patricia import calculate_pedersen_root, calculate_root  # noqa: E402
from starknet_spec.json_codec import state_diff_from_json, transaction_from_json  # noqa: E402
from starknet_spec.transaction_hash import get_transaction_hash  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def _felts(values: list[str]) -> list[int]:
    return [int(v, 16) for v in values]


def _check_pedersen(inp: dict[str, Any]) -> str:
    a, b = _felts(inp["inputs"])
    return hex(pedersen(a, b))


def _check_poseidon(inp: dict[str, Any]) -> str:
    return hex(poseidon_many(_felts(inp["inputs"])))


def _check_starknet_keccak(inp: dict[str, Any]) -> str:
    return hex(starknet_keccak(bytes.fromhex(inp["input_hex"])))


def _check_transaction_hash(inp: dict[str, Any]) -> str:
    tx = transaction_from_json(inp["tx"])
    version: Optional[int] = int(inp["version"], 16) if "version" in inp else None
    return hex(get_transaction_hash(tx, ChainId(inp["chain_id"]), version))


def _check_state_diff_hash(inp: dict[str, Any]) -> str:
    return hex(calculate_state_diff_hash(state_diff_from_json(inp["state_diff"])))


def _check_patricia_root(inp: dict[str, Any]) -> str:
    leaves = _felts(inp["leaves"])
    if inp.get("hash") == "pedersen":
        return hex(calculate_pedersen_root(leaves))
    return hex(calculate_root(leaves))


_CHECKERS: dict[str, Callable[[dict[str, Any]], str]] = {
    "pedersen": _check_pedersen,
    "poseidon": _check_poseidon,
    "starknet_keccak": _check_starknet_keccak,
    "transaction_hash": _check_transaction_hash,
    "state_diff_hash": _check_state_diff_hash,
    "patricia_root": _check_patricia_root,
}


def _check_vector_file(path: Path) -> tuple[int, list[str]]:
    failures: list[str] = []
    checked = 0
    data = json.loads(path.read_text())
    for vec in data.get("test_vectors", []):
        if not vec.get("runnable", True):
            continue
        inp = vec.get("input", {})
        checker = _CHECKERS.get(inp.get("kind", ""))
        if checker is None:
            logger.debug("%s: no checker for %r", vec.get("name"), inp.get("kind"))
            continue
        checked += 1
        actual = checker(inp)
        if actual != vec["expected"]["hash"]:
            failures.append(f"{path.name}:{vec['name']}: expected {vec['expected']['hash']}, got {actual}")
    return checked, failures


@click.command()
@click.option(
    "--fixtures",
    "fixtures_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=ROOT / "fixtures",
    help="Directory produced by tools/fill.py",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(fixtures_dir: Path, verbose: bool) -> None:
    """Re-validate emitted vectors against the library."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    failures: list[str] = []
    total = 0
    for path in sorted(fixtures_dir.rglob("*.json")):
        checked, file_failures = _check_vector_file(path)
        total += checked
        failures.extend(file_failures)
        logger.info("%s: %d checked, %d failed", path.relative_to(fixtures_dir), checked, len(file_failures))

    if failures:
        for f in failures:
            logger.error("FAIL %s", f)
        raise SystemExit(1)

    logger.info("All %d fixtures passed", total)


if __name__ == "__main__":
    main()
