"""Generate field-hash YAML vectors from Python specs."""

from __future__ import annotations

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT / "tools"))

from starknet_spec.crypto.hash_vectors import (  # noqa: E402
    keccak256_vectors,
    pedersen_vectors,
    poseidon_vectors,
    starknet_keccak_vectors,
)
from yaml_dump import write_yaml  # noqa: E402


def main() -> None:
    out = ROOT / "fixtures" / "crypto"
    out.mkdir(parents=True, exist_ok=True)

    write_yaml(out / "keccak256.yaml", keccak256_vectors())
    write_yaml(out / "starknet_keccak.yaml", starknet_keccak_vectors())
    write_yaml(out / "pedersen.yaml", pedersen_vectors())
    write_yaml(out / "poseidon.yaml", poseidon_vectors())


if __name__ == "__main__":
    main()
