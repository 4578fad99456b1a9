import argparse
from typing import List

UNITS: List[str] = [
    "years",
    "months",
    "weeks",
    "days",
    "hours",
    "minutes",
    "seconds",
    "fixed",
]


def non_negative_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="isodelta", description="ISO-8601 duration toolkit"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse = subparsers.add_parser("parse", help="Parse a duration and show its fields")
    parse.add_argument("duration", help="ISO-8601 duration, e.g. P3Y6M4DT12H30M5S")
    parse.add_argument(
        "--json", action="store_true", help="Print the fields as a JSON object"
    )

    fmt = subparsers.add_parser("format", help="Build a duration from its components")
    for name in ("year", "month", "day", "hour", "minute", "second"):
        fmt.add_argument(
            f"--{name}",
            type=non_negative_float,
            default=0.0,
            help=f"Number of {name}s",
        )

    convert = subparsers.add_parser(
        "convert", help="Express a duration in a single unit"
    )
    convert.add_argument("duration", help="ISO-8601 duration")
    convert.add_argument(
        "--unit",
        choices=UNITS,
        default="seconds",
        help="Target unit ('fixed' approximates years and months)",
    )

    add = subparsers.add_parser(
        "add", help="Add a duration to a date/time using real calendar lengths"
    )
    add.add_argument("anchor", help="ISO-8601 date/time, e.g. 2000-06-01T00:00:00Z")
    add.add_argument("duration", help="ISO-8601 duration")

    serve = subparsers.add_parser("serve", help="Run the isodelta web API")
    serve.add_argument("--host", default="127.0.0.1", help="Host interface for the API")
    serve.add_argument(
        "--port", type=int, default=8000, help="Port to bind the HTTP server"
    )
    serve.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Minimum level written by the request logger",
    )

    return parser


def parse_args(argv):
    parser = create_parser()
    return parser.parse_args(argv)
