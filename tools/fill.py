"""Run the test suite and emit its vectors as JSON fixtures."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
OUT = ROOT / "fixtures"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> int:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join([str(ROOT / "src"), str(ROOT)])

    cmd = [
        sys.executable,
        "-m",
        "pytest",
        str(ROOT / "tests"),
        "-q",
        "--output",
        str(OUT),
    ]
    logger.info("Running: %s", " ".join(cmd))
    rc = subprocess.call(cmd, env=env, cwd=str(ROOT))
    if rc == 0:
        logger.info("Fixtures written to %s", OUT)
    else:
        logger.error("pytest exited with %d; fixtures may be incomplete", rc)
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
