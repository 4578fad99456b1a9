"""HTTP API exposing duration parsing, conversion and calendar addition."""

from __future__ import annotations

import logging
import math
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, Literal, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .calendar_math import add_duration
from .duration import Duration
from .parser import ParseError, parse_duration
from .serialization import ISODuration, serialize

Unit = Literal["years", "months", "weeks", "days", "hours", "minutes", "seconds", "fixed"]


class AddRequest(BaseModel):
    anchor: datetime
    duration: ISODuration


class AddResponse(BaseModel):
    anchor: datetime
    duration: ISODuration
    result: datetime


def _kind(duration: Duration) -> str:
    if duration.has_calendar_part and duration.has_time_part:
        return "mixed"
    if duration.has_calendar_part:
        return "calendar"
    return "fixed"


def convert(duration: Duration, unit: str) -> Optional[float]:
    """Express ``duration`` in ``unit``; ``None`` when the unit is undefined for it.

    Raises ``OverflowError`` when the value does not fit a finite float or a
    ``timedelta``.
    """
    if unit == "fixed":
        return duration.to_fixed_timedelta().total_seconds()
    result = getattr(duration, f"num_{unit}")()
    if result is not None and not math.isfinite(result):
        raise OverflowError(f"{serialize(duration)} is too large to express in {unit}")
    return result


def parse_error_detail(exc: ParseError) -> Dict[str, Any]:
    return {
        "message": str(exc),
        "kind": exc.kind.value,
        "offset": exc.offset,
        "input": exc.text,
    }


def create_app(logger: Optional[logging.Logger] = None) -> FastAPI:
    log = logger or logging.getLogger("isodelta.webapp")

    app = FastAPI(title="isodelta Web API")
    app.state.logger = log

    @app.exception_handler(ParseError)
    async def parse_error_handler(request: Request, exc: ParseError) -> JSONResponse:
        log.warning(f"[parse] rejected {exc.text!r}: {exc}")
        return JSONResponse(status_code=422, content={"detail": parse_error_detail(exc)})

    @app.get("/api/parse")
    async def api_parse(value: str) -> JSONResponse:
        duration = parse_duration(value)
        log.info(f"[parse] {value} -> {duration}")
        return JSONResponse(
            {
                "duration": serialize(duration),
                "fields": asdict(duration),
                "kind": _kind(duration),
            }
        )

    @app.get("/api/convert")
    async def api_convert(value: str, unit: Unit = "seconds") -> JSONResponse:
        duration = parse_duration(value)
        try:
            result = convert(duration, unit)
        except OverflowError as exc:
            log.warning(f"[convert] out of range: {exc}")
            raise HTTPException(status_code=422, detail=f"result out of range: {exc}")
        log.info(f"[convert] {value} as {unit} -> {result}")
        return JSONResponse(
            {"duration": serialize(duration), "unit": unit, "result": result}
        )

    @app.post("/api/add", response_model=AddResponse)
    async def api_add(body: AddRequest) -> AddResponse:
        try:
            result = add_duration(body.anchor, body.duration)
        except (OverflowError, ValueError) as exc:
            log.warning(f"[add] out of range: {exc}")
            raise HTTPException(status_code=422, detail=f"result out of range: {exc}")
        log.info(f"[add] {body.anchor.isoformat()} + {body.duration} -> {result.isoformat()}")
        return AddResponse(anchor=body.anchor, duration=body.duration, result=result)

    return app
