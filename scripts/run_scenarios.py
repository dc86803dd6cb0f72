#!/usr/bin/env python
"""Run the live Kraken scenarios.

Configuration is validated before pytest starts: a missing API_HOST,
PUBLIC_KEY or PRIVATE_KEY aborts the run instead of skipping scenarios.

Usage:
    API_HOST=https://api.kraken.com PUBLIC_KEY=... PRIVATE_KEY=... \
        python scripts/run_scenarios.py --suite all -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cex.kraken.api.config import KrakenConfig
from cex.kraken.api.errors import ConfigurationError

logger = logging.getLogger("run_scenarios")

SCENARIOS_DIR = ROOT / "tests" / "scenarios"

_SUITES: dict[str, tuple[str, ...]] = {
    "public": ("test_public_user_live.py",),
    "authenticated": ("test_authenticated_user_live.py",),
    "all": ("test_public_user_live.py", "test_authenticated_user_live.py"),
}


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run the Kraken behaviour scenarios against API_HOST.")
    p.add_argument("--suite", default="all", choices=sorted(_SUITES.keys()))
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging and verbose pytest output")
    return p.parse_args()


def main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = KrakenConfig.from_env(require_credentials=args.suite != "public")
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 2

    logger.info("Running %s scenarios against %s", args.suite, config.api_host)

    pytest_args = [str(SCENARIOS_DIR / name) for name in _SUITES[args.suite]]
    pytest_args += ["-m", "integration", "-p", "no:cacheprovider"]
    if args.verbose:
        pytest_args += ["-v", "--log-cli-level=DEBUG"]
    return int(pytest.main(pytest_args))


if __name__ == "__main__":
    raise SystemExit(main())
