from __future__ import annotations

import argparse
import importlib.metadata
import sys
import traceback


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="safety-dashboard",
        description="Safety dashboard: kiosk GUI and headless maintenance commands",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=importlib.metadata.version("safety-dashboard"),
    )

    sub = parser.add_subparsers(dest="command")

    from safety_dashboard.cli import register_subcommands

    register_subcommands(sub)

    args = parser.parse_args()

    if args.command is None:
        from safety_dashboard.app import run

        return run()

    from safety_dashboard.cli import run_command
    from safety_dashboard.dashboard.logging_setup import configure_logging, set_stderr_level

    configure_logging("WARNING")
    if getattr(args, "debug", False):
        set_stderr_level("DEBUG")
    try:
        return run_command(args)
    except Exception as exc:  # noqa: BLE001
        if getattr(args, "debug", False):
            print(f"[debug] error: {exc}", file=sys.stderr)
            traceback.print_exc()
        else:
            print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
