"""Command-line entry point: ``viedit [FILE]``."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from viedit import __version__
from viedit.config import EditorConfig
from viedit.runtime import telemetry


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="viedit", description="A small modal text editor."
    )
    parser.add_argument("file", nargs="?", help="File to open (created on :w)")
    parser.add_argument(
        "--log-preset",
        choices=("development", "quiet"),
        default=None,
        help="Telemetry preset (default: taken from VIEDIT_LOG_* variables)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    config = EditorConfig.from_env()

    from viedit.adapters.textual.app import ViEditApp

    ViEditApp(args.file, config=config).run()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual launch
    raise SystemExit(main())
