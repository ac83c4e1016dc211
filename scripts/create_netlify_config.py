#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _bootstrap_pythonpath() -> None:
    import sys

    src = _repo_root() / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


_bootstrap_pythonpath()

from kpi_dashboard_functions.deploy.netlify import write_netlify_config  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write netlify.toml with function timeouts and background jobs.")
    parser.add_argument(
        "--output",
        default=str(_repo_root() / "netlify.toml"),
        help="Destination path. Default: <repo>/netlify.toml",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    try:
        path = write_netlify_config(Path(args.output))
    except OSError as exc:
        print(f"[netlify-config] failed to write {args.output}: {exc}")
        return 1
    print(f"[netlify-config] wrote {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
