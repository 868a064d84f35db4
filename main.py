# main.py

"""Entry point for the aTrace dashboard (TUI or headless CLI)."""

import argparse
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("atrace.main")


def _add_field_options(
    parser: argparse.ArgumentParser, with_status: bool
) -> None:
    """Options shared by ``add`` and ``update``."""
    parser.add_argument("--title", default=None)
    parser.add_argument("--recipient", default=None)
    parser.add_argument("--phone", default=None, help="Recipient phone.")
    parser.add_argument("--description", default=None)
    parser.add_argument("--origin", default=None)
    parser.add_argument("--destination", default=None)
    parser.add_argument(
        "--eta",
        default=None,
        help="YYYY-MM-DD HH:MM (UTC) or Unix seconds.",
    )
    if with_status:
        parser.add_argument(
            "--status", choices=Settings.STATUSES, default=None
        )
    parser.add_argument(
        "--package",
        action="append",
        default=None,
        dest="packages",
        metavar="NAME:WEIGHT:UNIT:QTY:UNIT",
        help="Package spec; repeat for several packages.",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="atrace",
        description="Product shipment tracking dashboard.",
        epilog="Run without a command to launch the interactive TUI.",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="DEBUG",
        help="Threshold for this run's log file (default: DEBUG).",
    )
    sub = parser.add_subparsers(dest="command")

    list_cmd = sub.add_parser("list", help="Show one page of products.")
    list_cmd.add_argument("--page", type=int, default=1)
    list_cmd.add_argument(
        "--page-size", type=int, default=Settings.PAGE_SIZE
    )
    list_cmd.add_argument(
        "-f",
        "--format",
        choices=["table", "json"],
        default="table",
        dest="output_format",
    )

    sub.add_parser("summary", help="Show counts by status.")

    add_cmd = sub.add_parser("add", help="Create a product.")
    _add_field_options(add_cmd, with_status=False)

    update_cmd = sub.add_parser("update", help="Change product fields.")
    update_cmd.add_argument("product_id")
    _add_field_options(update_cmd, with_status=True)

    delete_cmd = sub.add_parser("delete", help="Delete a product.")
    delete_cmd.add_argument("product_id")

    export_cmd = sub.add_parser("export", help="Export all products.")
    export_cmd.add_argument(
        "-f",
        "--format",
        choices=["json", "csv"],
        default="json",
        dest="output_format",
    )
    return parser


def _field_options(args: argparse.Namespace) -> dict[str, object]:
    return {
        "title": args.title,
        "recipient": args.recipient,
        "phone": args.phone,
        "description": args.description,
        "origin": args.origin,
        "destination": args.destination,
        "eta": args.eta,
        "packages": args.packages,
    }


def _run_tui() -> None:
    """Launch the interactive Textual dashboard."""
    from src.ui.app import DashboardApp

    try:
        app = DashboardApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("aTrace TUI shutting down")


def _run_cli(args: argparse.Namespace) -> int:
    """Dispatch a headless subcommand and return its exit code."""
    from src.cli import runner

    store = runner.open_store()
    if args.command == "list":
        return runner.run_list(
            store, args.page, args.page_size, args.output_format
        )
    if args.command == "summary":
        return runner.run_summary(store)
    if args.command == "add":
        return runner.run_add(store, **_field_options(args))
    if args.command == "update":
        return runner.run_update(
            store,
            args.product_id,
            status=args.status,
            **_field_options(args),
        )
    if args.command == "delete":
        return runner.run_delete(store, args.product_id)
    return runner.run_export(store, args.output_format)


def main(argv: list[str] | None = None) -> None:
    """Route to the TUI (no command) or a headless CLI command."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = setup_logging(getattr(logging, args.log_level))
    logger.info("aTrace starting — log file: %s", log_file)

    if args.command is None:
        _run_tui()
    else:
        sys.exit(_run_cli(args))


if __name__ == "__main__":
    main()
