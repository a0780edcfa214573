"""
API-level models and codec.

This module contains the models and conversions that belong to the API layer:
- RiemannEvent (the public event record)
- encode_event, decode_events (sparse mapping to and from the wire schema)
- build_event_message, build_query_message (wire messages for the client)
"""

from .models import RiemannEvent, float32
from .codec import FIELD_MAP, FieldMapping, encode_event, decode_events, build_event_message, build_query_message

__all__ = [
    "RiemannEvent",
    "float32",
    "FIELD_MAP",
    "FieldMapping",
    "encode_event",
    "decode_events",
    "build_event_message",
    "build_query_message",
]
