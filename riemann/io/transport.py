"""
Riemann wire-level transports.

This module implements the two ways a serialized Msg travels to a Riemann
server, using asyncio.

Terms:
- Transport = A strategy for exchanging one Msg over a connection
- Connection = The open socket a transport writes to (and maybe reads from)

Wire formats:
- TCP: [length (4 bytes, unsigned, big-endian), Msg (length bytes)] in both
  directions. Every request is answered by exactly one response frame.
- UDP: a single datagram holding the Msg, no length prefix, no response.

Example usage:
async def main():
    transport = select_transport("tcp")
    connection = await transport.open("127.0.0.1", 5555)
    msg = Msg()
    msg.query.string = 'service = "cpu"'
    response = await transport.send(msg, connection)
    print(response.events)
    await connection.close()

asyncio.run(main())
"""

import asyncio
import logging
import socket
import struct
from abc import ABC, abstractmethod
from typing import Optional

from google.protobuf.message import DecodeError

from ..exceptions import RiemannConnectionError, RiemannDecodeError, RiemannServerError, RiemannUnsupportedTransportError
from .proto import Msg

# Constants
class ClientConst:
    """Constants for the Riemann transports"""
    DEFAULT_PORT = 5555
    HEADER = struct.Struct(">I")  # frame length prefix


# Connections

class StreamConnection:
    """An open TCP connection"""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter, logger: Optional[logging.Logger] = None):
        self.reader = reader
        self.writer = writer
        self.logger = logger or logging.getLogger(__name__)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed or self.writer.is_closing()

    def abort(self):
        """Stop using the connection at once, e.g. when an exchange was cut off mid-frame"""
        self._closed = True
        self.writer.close()

    async def close(self):
        if self._closed:
            return
        self.abort()
        try:
            await self.writer.wait_closed()
        except OSError as e:
            # The peer may already have reset the connection
            self.logger.debug(f"Error while closing stream connection: {e}")


class RiemannDatagramProtocol(asyncio.DatagramProtocol):
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.transport: Optional[asyncio.DatagramTransport] = None
        self.error: Optional[Exception] = None

    def connection_made(self, transport):
        self.transport = transport

    def datagram_received(self, data, addr):
        # Riemann never answers UDP
        self.logger.debug(f"Ignoring unexpected datagram from {addr[0]}:{addr[1]}")

    def error_received(self, exc):
        # Raised by the next UdpTransport.send, which is usually the one that caused it
        self.logger.debug(f"Datagram protocol error: {exc}")
        self.error = exc

    def take_error(self) -> Optional[Exception]:
        error, self.error = self.error, None
        return error

    def connection_lost(self, exc):
        if exc:
            self.logger.error(f"Datagram connection lost: {exc}")
        else:
            self.logger.info("Datagram connection closed")


class DatagramConnection:
    """A connected UDP socket"""

    def __init__(self, transport: asyncio.DatagramTransport, protocol: RiemannDatagramProtocol):
        self.transport = transport
        self.protocol = protocol
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed or self.transport.is_closing()

    async def close(self):
        if self._closed:
            return
        self._closed = True
        self.transport.close()


# Transports

class RiemannTransport(ABC):
    """Strategy for exchanging a Msg with the server"""

    name: str = ""
    expects_response: bool = False

    def __init__(self, family: int = socket.AF_UNSPEC, logger: Optional[logging.Logger] = None):
        self.family = family
        self.logger = logger or logging.getLogger(__name__)

    @abstractmethod
    async def open(self, host: str, port: int):
        """Open a connection to host:port"""

    @abstractmethod
    async def send(self, message: Msg, connection) -> Optional[Msg]:
        """Send a message, returning the response if the transport has one"""

    @staticmethod
    def _serialize(message: Msg) -> bytes:
        return message.SerializeToString()

    @staticmethod
    def _check_open(connection):
        if connection is None or connection.closed:
            raise RiemannConnectionError("Connection is closed")


class TcpTransport(RiemannTransport):
    """Length-prefixed request/response over a stream connection"""

    name = "tcp"
    expects_response = True

    async def open(self, host: str, port: int) -> StreamConnection:
        try:
            reader, writer = await asyncio.open_connection(host, port, family=self.family)
        except OSError as e:
            raise RiemannConnectionError(f"dial tcp {host}:{port}: {e}") from e
        self.logger.info(f"Connected to Riemann server at {host}:{port} (tcp)")
        return StreamConnection(reader, writer, self.logger)

    async def send(self, message: Msg, connection: StreamConnection) -> Msg:
        self._check_open(connection)
        data = self._serialize(message)

        # Prefix and payload go out in one write so a frame is never split
        try:
            connection.writer.write(ClientConst.HEADER.pack(len(data)) + data)
            await connection.writer.drain()
            header = await connection.reader.readexactly(ClientConst.HEADER.size)
            (length,) = ClientConst.HEADER.unpack(header)
            payload = await connection.reader.readexactly(length)
        except asyncio.IncompleteReadError as e:
            connection.abort()
            raise RiemannConnectionError(f"Connection closed after {len(e.partial)} of {e.expected} bytes") from e
        except OSError as e:
            connection.abort()
            raise RiemannConnectionError(str(e)) from e
        except BaseException:
            # Cancelled mid-exchange: an unread reply would be handed to the next request
            connection.abort()
            raise

        response = Msg()
        try:
            response.ParseFromString(payload)
        except DecodeError as e:
            raise RiemannDecodeError(f"Invalid response of {length} bytes: {e}") from e

        self.logger.debug(f"Exchanged {len(data)} byte request for {length} byte response")

        # Only an explicit ok=false is a failure
        if response.HasField("ok") and not response.ok:
            raise RiemannServerError(response.error)
        return response


class UdpTransport(RiemannTransport):
    """Fire-and-forget datagrams"""

    name = "udp"
    expects_response = False

    async def open(self, host: str, port: int) -> DatagramConnection:
        loop = asyncio.get_running_loop()
        try:
            transport, protocol = await loop.create_datagram_endpoint(
                lambda: RiemannDatagramProtocol(self.logger),
                remote_addr=(host, port),  # Connected UDP, so sendto needs no address
                family=self.family,
            )
        except OSError as e:
            raise RiemannConnectionError(f"dial udp {host}:{port}: {e}") from e
        self.logger.info(f"Connected to Riemann server at {host}:{port} (udp)")
        return DatagramConnection(transport, protocol)

    async def send(self, message: Msg, connection: DatagramConnection) -> None:
        self._check_open(connection)
        data = self._serialize(message)
        # sendto reports socket errors through error_received rather than raising
        error = connection.protocol.take_error()
        if error is None:
            connection.transport.sendto(data)
            error = connection.protocol.take_error()
        if error is not None:
            raise RiemannConnectionError(str(error)) from error
        self.logger.debug(f"Sent {len(data)} byte datagram")
        return None


NETWORKS: dict[str, tuple[type[RiemannTransport], int]] = {
    "tcp": (TcpTransport, socket.AF_UNSPEC),
    "tcp4": (TcpTransport, socket.AF_INET),
    "tcp6": (TcpTransport, socket.AF_INET6),
    "udp": (UdpTransport, socket.AF_UNSPEC),
    "udp4": (UdpTransport, socket.AF_INET),
    "udp6": (UdpTransport, socket.AF_INET6),
}


def select_transport(network: str, logger: Optional[logging.Logger] = None) -> RiemannTransport:
    """Return the transport for a network name such as "tcp" or "udp6" """
    if network not in NETWORKS:
        raise RiemannUnsupportedTransportError(f"dial {network!r}: unsupported network {network!r}")
    transport_cls, family = NETWORKS[network]
    return transport_cls(family=family, logger=logger)
