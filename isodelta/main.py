import asyncio
import json
import sys
from dataclasses import asdict
from datetime import datetime
from typing import List, Optional

import uvicorn
from dateutil.parser import isoparse

from .calendar_math import add_duration
from .cli import parse_args
from .duration import Duration
from .formatting import format_duration, format_number
from .logging_async import get_logger, log_worker, parse_level
from .parser import ParseError, parse_duration
from .webapp import convert, create_app


class UndefinedConversion(ValueError):
    pass


def describe_duration(text: str) -> dict:
    duration = parse_duration(text)
    return {"duration": format_duration(duration), **asdict(duration)}


def build_duration(
    year: float = 0.0,
    month: float = 0.0,
    day: float = 0.0,
    hour: float = 0.0,
    minute: float = 0.0,
    second: float = 0.0,
) -> str:
    return format_duration(Duration(year, month, day, hour, minute, second))


def convert_duration(text: str, unit: str) -> float:
    duration = parse_duration(text)
    result = convert(duration, unit)
    if result is None:
        raise UndefinedConversion(
            f"{format_duration(duration)} has no fixed length in {unit}"
        )
    return result


def add_to_anchor(anchor: str, text: str) -> datetime:
    try:
        start = isoparse(anchor)
    except ValueError as exc:
        raise ValueError(f"Invalid anchor date/time: {anchor}") from exc
    return add_duration(start, parse_duration(text))


async def serve_async(params):
    host = getattr(params, "host", "127.0.0.1")
    port = getattr(params, "port", 8000)
    level = parse_level(getattr(params, "log_level", "info"))

    log_queue: asyncio.Queue = asyncio.Queue()
    stop_event = asyncio.Event()
    log_task = asyncio.create_task(log_worker(log_queue, stop_event, level=level))
    logger = get_logger(log_queue)

    app = create_app(logger)
    config = uvicorn.Config(app, host=host, port=port, loop="asyncio", log_level="info")
    server = uvicorn.Server(config)

    logger.info(f"[serve] listening on http://{host}:{port}")
    try:
        await server.serve()
    finally:
        stop_event.set()
        await log_queue.join()
        await log_task


def main(argv: Optional[List[str]] = None):
    params = parse_args(argv or sys.argv[1:])
    try:
        if params.command == "parse":
            described = describe_duration(params.duration)
            if params.json:
                print(json.dumps(described))
            else:
                print(f"[parse] {described.pop('duration')}")
                for key, value in described.items():
                    print(f"{key:>8}: {format_number(value)}")
        elif params.command == "format":
            print(
                build_duration(
                    params.year,
                    params.month,
                    params.day,
                    params.hour,
                    params.minute,
                    params.second,
                )
            )
        elif params.command == "convert":
            try:
                result = convert_duration(params.duration, params.unit)
            except UndefinedConversion as exc:
                print(f"[convert] {exc}")
                sys.exit(1)
            print(format_number(result))
        elif params.command == "add":
            print(add_to_anchor(params.anchor, params.duration).isoformat())
        elif params.command == "serve":
            try:
                asyncio.run(serve_async(params))
            except KeyboardInterrupt:
                print("\n[interrupt] server exiting…")
        else:
            raise ValueError(f"Unknown command: {params.command}")
    except ParseError as exc:
        print(f"[error] {exc} ({exc.kind.value})")
        sys.exit(1)
    except (ValueError, OverflowError) as exc:
        print(f"[error] {exc}")
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover - exercised via CLI invocation
    main(sys.argv[1:])
