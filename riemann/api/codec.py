"""
Mapping between RiemannEvent and the wire schema.

Encoding is sparse: a field whose value is its type's zero value is not set on
the wire Event at all. Decoding is total: absent wire fields come back as the
zero value.

The three metric fields are aliased on the wire:
    metric_float  -> metric_f       (32-bit float)
    metric_int    -> metric_sint64  (zigzag int64)
    metric_double -> metric_d       (64-bit float)
"""

from dataclasses import dataclass
from typing import Callable, Iterable

from ..io.proto import Msg, Event
from .models import RiemannEvent, float32


@dataclass(frozen=True)
class FieldMapping:
    source: str                 # RiemannEvent attribute
    destination: str            # wire Event field
    convert: Callable[..., int | float | str]  # convert() is the zero value


FIELD_MAP: tuple[FieldMapping, ...] = (
    FieldMapping("state", "state", str),
    FieldMapping("service", "service", str),
    FieldMapping("host", "host", str),
    FieldMapping("description", "description", str),
    FieldMapping("ttl", "ttl", float32),
    FieldMapping("time", "time", int),
    FieldMapping("metric_float", "metric_f", float32),
    FieldMapping("metric_int", "metric_sint64", int),
    FieldMapping("metric_double", "metric_d", float),
)


def encode_event(event: RiemannEvent) -> Event:
    """Convert a RiemannEvent into a wire Event, leaving zero-valued fields unset"""
    wire = Event()
    for mapping in FIELD_MAP:
        value = getattr(event, mapping.source)
        if not value: # None, 0, 0.0 or ""
            continue
        setattr(wire, mapping.destination, mapping.convert(value))
    return wire


def decode_events(wire_events: Iterable[Event]) -> list[RiemannEvent]:
    """Convert wire Events into RiemannEvents, in order"""
    events = []
    for wire in wire_events:
        # Unset proto2 fields read back as their default, which is the zero value
        events.append(RiemannEvent(**{
            mapping.source: mapping.convert(getattr(wire, mapping.destination))
            for mapping in FIELD_MAP
        }))
    return events


def build_event_message(events: Iterable[RiemannEvent]) -> Msg:
    message = Msg()
    message.events.extend([encode_event(event) for event in events])
    return message


def build_query_message(query: str) -> Msg:
    message = Msg()
    message.query.string = query
    return message
