"""String interchange for durations, including a pydantic field type.

Structured-data layers only ever see the canonical ISO-8601 string; framing
is left to them.
"""

from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator, TypeAdapter, WithJsonSchema

from .duration import Duration
from .formatting import format_duration
from .parser import parse_duration


def serialize(duration: Duration) -> str:
    return format_duration(duration)


def deserialize(text: str) -> Duration:
    if not isinstance(text, str):
        raise TypeError(f"expected an ISO-8601 duration string, got {type(text).__name__}")
    return parse_duration(text)


def _validate(value: Any) -> Duration:
    if isinstance(value, Duration):
        return value
    if not isinstance(value, str):
        # pydantic only reports ValueError as a validation failure
        raise ValueError("expected an ISO-8601 duration string")
    return deserialize(value)


ISODuration = Annotated[
    Duration,
    PlainValidator(_validate),
    PlainSerializer(serialize, return_type=str),
    WithJsonSchema({"type": "string", "format": "duration"}),
]

duration_adapter: TypeAdapter = TypeAdapter(ISODuration)
