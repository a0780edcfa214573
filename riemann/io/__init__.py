"""
Wire-level protocol implementation.

This module contains the lowest-level communication components:
- Msg, Event, Query - The Riemann protobuf wire schema
- TcpTransport, UdpTransport - Raw TCP/UDP exchange of serialized messages
- Message framing and connection management
"""

from .proto import Msg, Event, Query
from .transport import (
    RiemannTransport,
    TcpTransport,
    UdpTransport,
    StreamConnection,
    DatagramConnection,
    ClientConst,
    NETWORKS,
    select_transport,
)

__all__ = [
    "Msg",
    "Event",
    "Query",
    "RiemannTransport",
    "TcpTransport",
    "UdpTransport",
    "StreamConnection",
    "DatagramConnection",
    "ClientConst",
    "NETWORKS",
    "select_transport",
]
