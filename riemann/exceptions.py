"""
Riemann client library exceptions.

This module defines all custom exceptions used throughout the library.
"""


class RiemannError(Exception):
    """Base exception for Riemann client errors"""
    pass


class RiemannUnsupportedTransportError(RiemannError, ValueError):
    """Raised when a client is dialled with an unknown network name"""
    pass


class RiemannConnectionError(RiemannError, ConnectionError):
    """Raised when dialling, reading from or writing to the server fails"""
    pass


class RiemannServerError(RiemannError):
    """Raised when the server answers a request with ok=false"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RiemannUnsupportedOperationError(RiemannError):
    """Raised when an operation is not possible on the active transport"""
    pass


class RiemannDecodeError(RiemannError, ValueError):
    """Raised when response bytes cannot be parsed as a Riemann message"""
    pass


class RiemannConfigurationError(RiemannError, ValueError):
    """Raised when configuration is invalid"""
    pass
