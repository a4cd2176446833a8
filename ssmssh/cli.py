"""Command-line front door for ssmssh.

Parses CLI options over the JSON config, runs the interactive selector,
then hands the chosen instance to ``aws ssm start-session``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_selector_config
from .errors import SessionError
from .inventory import AwsInventory
from .logs import configure_logging
from .runtime.app import run_selector
from .runtime.navigator import SelectorTiming
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _positive_float(value: str) -> float:
    """argparse type for positive second counts."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ssmssh",
        description="Pick an AWS profile, region, and EC2 instance, then start an SSM session.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--aws-cli", default=None, help="Path to the aws executable.")
    parser.add_argument(
        "--discovery-region",
        default=None,
        help="Region used to list available regions (default: us-west-2).",
    )
    parser.add_argument(
        "--list-timeout",
        type=_positive_float,
        default=None,
        help="Seconds allowed for region/instance lookups (default: 15).",
    )
    parser.add_argument(
        "--preview-timeout",
        type=_positive_float,
        default=None,
        help="Seconds allowed for instance tag lookups (default: 5).",
    )
    parser.add_argument(
        "--window-rows",
        type=_positive_int,
        default=None,
        help="Maximum list rows shown at once (default: 20).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug detail.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the session command instead of running it.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the selector and session hand-off; return the process exit status."""
    args = build_parser().parse_args(argv)
    config = load_selector_config()
    configure_logging(args.log_file or config.log_file, verbose=args.verbose)

    inventory = AwsInventory(
        args.aws_cli or config.aws_cli,
        discovery_region=args.discovery_region or config.discovery_region,
    )
    timing = SelectorTiming(
        list_timeout=args.list_timeout or config.list_timeout,
        preview_timeout=args.preview_timeout or config.preview_timeout,
    )
    theme = resolve_theme(args.theme or config.theme, no_color=args.no_color)

    navigator = run_selector(
        inventory,
        theme,
        timing=timing,
        window_rows=args.window_rows or config.window_rows,
    )
    state = navigator.state
    if state.error is not None:
        sys.stderr.write(f"Error: {state.error}\n")
        return 1
    selection = navigator.selection()
    if selection is None:
        logger.info("selection aborted at stage %s", state.stage.value)
        return 1

    sys.stdout.write(
        f"Selected: Profile={selection.profile}, Region={selection.region}, "
        f"Instance={selection.instance_id}\n"
    )
    if args.dry_run:
        command = inventory.session_command(selection.profile, selection.region, selection.instance_id)
        sys.stdout.write(" ".join(command) + "\n")
        return 0
    try:
        inventory.start_session(selection.profile, selection.region, selection.instance_id)
    except SessionError as exc:
        logger.error("session failed: %s", exc)
        sys.stdout.write(f"Error starting SSM session: {exc}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
