"""
Riemann Python Client

An asyncio library for sending events to, and querying, a Riemann server.

This library provides three distinct layers of abstraction:

1. **riemann.io**: Wire-level protocol implementation (protobuf schema, TCP/UDP framing)
2. **riemann.api**: The RiemannEvent record and its mapping to the wire schema
3. **riemann.interface**: RiemannClient, one serialized session per connection

Example usage:
    import riemann

    async with await riemann.dial("tcp", "localhost:5555") as client:
        await client.send(riemann.RiemannEvent(host="web1", service="cpu", metric_double=0.42, ttl=60))
        for event in await client.query('service = "cpu"'):
            print(event.host, event.metric)

Note that fields left at zero (including a metric of exactly 0) are not sent.
"""

# High-level interface (recommended for most users)
from .interface import RiemannClient, dial

# API-level models and codec
from .api import RiemannEvent, encode_event, decode_events

# Low-level wire components
from .io import Msg, Event, Query, RiemannTransport, TcpTransport, UdpTransport, ClientConst, select_transport

# Exceptions
from .exceptions import (
    RiemannError,
    RiemannUnsupportedTransportError,
    RiemannConnectionError,
    RiemannServerError,
    RiemannUnsupportedOperationError,
    RiemannDecodeError,
    RiemannConfigurationError,
)

# Utilities
from .utils import RiemannConfig, load_config, parse_address, run_with_keyboard_interrupt

__version__ = "0.1.0"

# Public API - these are the main classes users should import
__all__ = [
    # High-level interface (recommended)
    "RiemannClient",
    "dial",

    # API-level models
    "RiemannEvent",
    "encode_event",
    "decode_events",

    # Low-level models (for advanced users)
    "Msg",
    "Event",
    "Query",
    "RiemannTransport",
    "TcpTransport",
    "UdpTransport",
    "ClientConst",
    "select_transport",

    # Exceptions
    "RiemannError",
    "RiemannUnsupportedTransportError",
    "RiemannConnectionError",
    "RiemannServerError",
    "RiemannUnsupportedOperationError",
    "RiemannDecodeError",
    "RiemannConfigurationError",

    # Utilities
    "RiemannConfig",
    "load_config",
    "parse_address",
    "run_with_keyboard_interrupt",
]
