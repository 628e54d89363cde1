"""
Command-line interface for GST Cal.
"""

import argparse
import json
import sys
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from . import __version__
from .tax_calculation.orders import OrderComputation
from .tax_calculation.service import OrderTotalsService
from .utils.config import Config
from .utils.logging import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="gst-cal",
        description="GST Cal - Restaurant Order GST Breakdown Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gst-cal --version
  gst-cal order-totals --order-id 1042 --env production
  gst-cal order-totals --order-id 1042 --env staging --json
  gst-cal file-totals --file order.json
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"GST Cal {__version__}",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    parser.add_argument(
        "--log-file",
        help="Log file path",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
    )

    order_parser = subparsers.add_parser(
        "order-totals",
        help="Compute the GST breakdown of an order stored in MongoDB",
    )
    order_parser.add_argument(
        "--order-id",
        type=str,
        required=True,
        help="ID of the order to compute",
    )
    order_parser.add_argument(
        "--env",
        type=str,
        choices=["staging", "production", "stg", "prod"],
        default="staging",
        help="Database environment (default: staging)",
    )
    order_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the breakdown as JSON",
    )

    file_parser = subparsers.add_parser(
        "file-totals",
        help="Compute the GST breakdown of an order read from a JSON file",
    )
    file_parser.add_argument(
        "--file",
        required=True,
        help="JSON document with 'order', 'menuItems', 'categories' and optional 'vendor'",
    )
    file_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the breakdown as JSON",
    )

    return parser


def _print_box(header_lines: List[Tuple[str, str]]) -> None:
    label_width = max(len(lbl) for lbl, _ in header_lines)
    inner_width = max(len(f" {lbl.ljust(label_width)} : {val}") for lbl, val in header_lines)
    print("┌" + "─" * inner_width + "┐")
    for lbl, val in header_lines:
        line = f" {lbl.ljust(label_width)} : {val}"
        print(f"│{line.ljust(inner_width)}│")
    print("└" + "─" * inner_width + "┘")


def render_computation(result: OrderComputation, header_lines: List[Tuple[str, str]]) -> None:
    """Print a receipt-style breakdown of a computed order."""
    _print_box(header_lines + [("Order ID", str(result.order_id))])

    print("\nLINE ITEMS:")
    print("=" * 72)
    print(f"{'Item':<24}{'Qty':>5}{'Price':>11}{'GST %':>8}{'Mode':>9}{'GST':>7}{'Amount':>8}")
    for line in result.lines:
        print(
            f"{line.name[:23]:<24}{line.quantity:>5}{line.display_unit_price:>11.2f}"
            f"{line.gst_rate:>8.2f}{line.gst_mode:>9}{line.gst_amount:>7.2f}{line.display_amount:>8.2f}"
        )

    totals = result.totals
    print("\nTOTALS:")
    print("=" * 72)
    print(f"   Subtotal:              {totals.subtotal:.2f}")
    for entry in totals.gst_breakdown:
        if entry.cgst_amount > 0:
            print(f"   CGST @ {entry.cgst_rate:.2f}%:          {entry.cgst_amount:.2f}")
        if entry.sgst_amount > 0:
            print(f"   SGST @ {entry.sgst_rate:.2f}%:          {entry.sgst_amount:.2f}")
    if totals.gst_included > 0:
        print(f"   CGST (included):       {totals.cgst_included:.2f}")
        print(f"   SGST (included):       {totals.sgst_included:.2f}")
    if totals.show_round_off:
        print(f"   Round Off:             {totals.round_off:+.2f}")
    print(f"   TOTAL:                 {totals.final_total:.2f}")


def order_totals(order_id: str, environment: str = "staging", as_json: bool = False) -> int:
    """Compute and print the breakdown of a stored order."""
    load_dotenv(".env")
    config = Config(".env")
    settings = config.environment_settings(environment)

    service = OrderTotalsService(
        db_name=settings["db_name"],
        mongo_url=settings["mongo_url"],
        config=config,
    )
    try:
        result = service.compute_for_order_id(order_id)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        render_computation(
            result,
            [("Environment", environment.upper()), ("Database", str(settings["db_name"]))],
        )
    return 0


def file_totals(path: str, as_json: bool = False) -> int:
    """Compute and print the breakdown of an order stored in a JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except (OSError, ValueError) as e:
        print(f"Error: cannot read {path}: {e}")
        return 1
    if not isinstance(document, dict) or not isinstance(document.get("order"), dict):
        print(f"Error: {path} has no 'order' object")
        return 1

    service = OrderTotalsService()
    result = service.compute_for_document(
        document["order"],
        menu_items=document.get("menuItems") or [],
        categories=document.get("categories") or [],
        vendor=document.get("vendor"),
    )
    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        render_computation(result, [("Source", path)])
    return 0


def main(args: Optional[list] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    log_level = "DEBUG" if parsed_args.verbose else "INFO"
    logger = setup_logging(level=log_level, log_file=parsed_args.log_file)

    try:
        if parsed_args.command == "order-totals":
            return order_totals(parsed_args.order_id, parsed_args.env, parsed_args.json)
        if parsed_args.command == "file-totals":
            return file_totals(parsed_args.file, parsed_args.json)
        parser.print_help()
        return 1
    except Exception as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
