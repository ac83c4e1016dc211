#!/usr/bin/env python3
from __future__ import annotations

import argparse
import os
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _bootstrap_pythonpath() -> None:
    import sys

    src = _repo_root() / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


_bootstrap_pythonpath()

from kpi_dashboard_functions.deploy.netlify import REQUIRED_ENV_VARS, missing_env_vars  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fail the build when required environment variables are unset.")
    parser.add_argument(
        "--require",
        action="append",
        default=[],
        help=f"Extra variable to require (repeatable). Always required: {', '.join(REQUIRED_ENV_VARS)}",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    required = REQUIRED_ENV_VARS + tuple(args.require)
    missing = missing_env_vars(os.environ, required)
    if missing:
        print("[validate-env] ERROR: missing required environment variables:")
        for name in missing:
            print(f"- {name}")
        print("[validate-env] add them to the site settings and deploy again.")
        return 1
    print("[validate-env] all required environment variables are present.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
