"""
High-level client session.

This module contains the interface layer:
- RiemannClient (one connection, serialized send/query/close)
- dial (connect by network name and address)
"""

from .client import RiemannClient, dial

__all__ = [
    "RiemannClient",
    "dial",
]
