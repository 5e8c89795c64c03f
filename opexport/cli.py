"""
op-export CLI — entry point for both export modes.

Usage:
    op-export               # Interactive: browse, toggle entries, save
    op-export <output>      # Non-interactive: full unfiltered export to <output>

A lone argument other than -h/--help is always the output path, even when it
starts with a dash.
"""

from __future__ import annotations

import argparse
import logging
import sys

from opexport.config import LoggingConfig, get_config

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="op-export",
        description="Export 1Password accounts, vaults and items to JSON.",
        usage="%(prog)s [output]",
    )
    parser.add_argument(
        "output",
        nargs="?",
        help="Write a full export to this path without starting the interactive UI",
    )

    if argv is None:
        argv = sys.argv[1:]
    if len(argv) == 1 and argv[0] not in ("-h", "--help", "--"):
        argv = ["--", *argv]

    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return int(e.code or 0)

    cfg = get_config()

    if args.output is None:
        _configure_logging(cfg.log, interactive=True)
        return _cmd_interactive()

    _configure_logging(cfg.log, interactive=False)
    return _cmd_export(args.output)


def _configure_logging(log_cfg: LoggingConfig, *, interactive: bool) -> None:
    """Log to the configured file; the TUI owns the terminal, so without a file
    interactive mode logs nowhere."""
    kwargs: dict = {
        "level": log_cfg.level_no,
        "format": "%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        "datefmt": "%Y-%m-%d %H:%M:%S",
    }
    if log_cfg.file is not None:
        kwargs["filename"] = str(log_cfg.file)
    elif interactive:
        kwargs["handlers"] = [logging.NullHandler()]
    logging.basicConfig(**kwargs)


def _cmd_interactive() -> int:
    from opexport.tui.app import ExportApp

    app = ExportApp()
    saved = app.run()
    if saved:
        print(f"Export written to {saved}")
    if app.navigator.error is not None:
        print(f"Error: {app.navigator.error.describe()}", file=sys.stderr)
        return 1
    if app.return_code:
        print("Error: the exporter stopped unexpectedly; see the log file", file=sys.stderr)
        return app.return_code
    return 0


def _cmd_export(output: str) -> int:
    from opexport.exclusions import ExclusionSet
    from opexport.export import save
    from opexport.onepassword import OPError, load_export_data

    print("Fetching all account data (this may take a while)...", file=sys.stderr)
    try:
        export_data = load_export_data()
    except OPError as e:
        print(f"Error: {e.describe()}", file=sys.stderr)
        return 1

    try:
        path = save(export_data, ExclusionSet(), output)
    except OSError as e:
        print(f"Error: cannot write {output}: {e}", file=sys.stderr)
        return 1

    print(f"Export written to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
