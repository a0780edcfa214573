"""
Riemann API-level models.

This module contains the public event record used by the API layer. It is a
flat, loosely-typed record; see riemann.api.codec for how it maps onto the
wire Event.
"""

import struct
from dataclasses import dataclass
from typing import Optional

_FLOAT32 = struct.Struct("<f")


def float32(value: float = 0.0) -> float:
    """Round a float to the nearest 32-bit float, as the wire stores ttl and metric_f"""
    return _FLOAT32.unpack(_FLOAT32.pack(value))[0]


@dataclass
class RiemannEvent:
    """
    A single Riemann event.

    Any field left at its zero value (0, 0.0 or "") is omitted on the wire, so
    a metric, time or ttl of exactly zero is indistinguishable from unset and
    comes back from a query as zero regardless. Send a small non-zero value if
    the server must see the field.

    ttl and metric_float are single precision on the wire and are rounded to
    32 bits when the event is created.
    """
    ttl: float = 0.0
    time: int = 0
    host: str = ""
    state: str = ""
    service: str = ""
    description: str = ""
    metric_float: float = 0.0
    metric_double: float = 0.0
    metric_int: int = 0

    def __post_init__(self):
        if self.ttl: self.ttl = float32(self.ttl)
        if self.metric_float: self.metric_float = float32(self.metric_float)

    @property
    def metric(self) -> Optional[int | float]:
        """Whichever metric is set, or None"""
        if self.metric_int: return self.metric_int
        if self.metric_double: return self.metric_double
        if self.metric_float: return self.metric_float
        return None
