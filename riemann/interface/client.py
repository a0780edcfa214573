import asyncio
import logging
import time
from typing import Iterable, Optional, Self

from colorama import Fore, Style
from google.protobuf import text_format

from ..api import RiemannEvent, build_event_message, build_query_message, decode_events
from ..exceptions import RiemannUnsupportedOperationError
from ..io import Msg, RiemannTransport, select_transport
from ..utils import RiemannConfig, parse_address

"""
===================================================================================
This module implements the Riemann client session on top of riemann.io.
===================================================================================
"""

class RiemannClient:
    """
    One connection to a Riemann server.

    Every exchange (send, query, close) holds the client's lock for its full
    duration, so concurrent tasks are served one at a time and a frame is never
    interleaved with another. Errors are raised to the caller; nothing is
    retried.

    Example usage:
    async with await RiemannClient.create("tcp", "localhost:5555") as client:
        await client.send(RiemannEvent(host="web1", service="cpu", metric_double=0.42))
        events = await client.query('service = "cpu"')
    """

    def __init__(self,
                 transport: RiemannTransport,
                 connection,
                 network: str = "",
                 address: str = "",
                 logger: Optional[logging.Logger] = None,
                 print_traffic: bool = False):
        self.transport = transport
        self.connection = connection
        self.network = network or transport.name
        self.address = address
        self.logger = logger or logging.getLogger(__name__)
        self.print_traffic = print_traffic
        self._lock = asyncio.Lock()

    @classmethod
    async def create(cls,
                     network: str,
                     address: str,
                     logger: Optional[logging.Logger] = None,
                     print_traffic: bool = False) -> Self:
        """Dial a Riemann server. network is one of tcp, tcp4, tcp6, udp, udp4, udp6."""
        logger = logger or logging.getLogger(__name__)
        # Pick the transport first so an unknown network never touches the network
        transport = select_transport(network, logger=logger)
        host, port = parse_address(address)
        connection = await transport.open(host, port)
        return cls(transport, connection, network=network, address=address, logger=logger, print_traffic=print_traffic)

    @classmethod
    async def from_config(cls, config: RiemannConfig, logger: Optional[logging.Logger] = None) -> Self:
        return await cls.create(config.network, config.address, logger=logger, print_traffic=config.print_traffic)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def is_connected(self) -> bool:
        """Check if client is connected"""
        return self.connection is not None and not self.connection.closed

    # ============================
    # PUBLIC OPERATIONS
    # ============================

    async def send(self, event: RiemannEvent) -> None:
        """Send one event"""
        await self._exchange(build_event_message([event]))

    async def send_events(self, events: Iterable[RiemannEvent]) -> None:
        """Send several events in a single message"""
        await self._exchange(build_event_message(events))

    async def query(self, query: str) -> list[RiemannEvent]:
        """Return the events in the server's index matching a query string"""
        if not self.transport.expects_response:
            raise RiemannUnsupportedOperationError(f"Querying over {self.network} is not supported")
        response = await self._exchange(build_query_message(query))
        return decode_events(response.events)

    async def close(self):
        """Close the connection. Further sends and queries raise RiemannConnectionError."""
        async with self._lock:
            if self.connection.closed:
                return
            await self.connection.close()
            self.logger.info(f"Closed connection to Riemann server at {self.address} ({self.network})")

    # ============================
    # EXCHANGE
    # ============================

    async def _exchange(self, message: Msg) -> Optional[Msg]:
        async with self._lock:
            sent_at = time.time()
            response = await self.transport.send(message, self.connection)
            if self.print_traffic:
                self._print_exchange(message, response, (time.time() - sent_at) * 1000)
            return response

    def _print_exchange(self, message: Msg, response: Optional[Msg], rtt_ms: float):
        request_str = text_format.MessageToString(message, as_one_line=True)
        line = Fore.MAGENTA + f"{self.network.upper()} SEND: [{message.ByteSize()} bytes] {request_str}  "
        if response is None:
            line += Fore.WHITE + Style.DIM + "NO RESPONSE"
        else:
            response_str = text_format.MessageToString(response, as_one_line=True)
            line += (Fore.WHITE + Style.DIM + f"RTT: {rtt_ms:.0f}ms".ljust(10)
                + Style.BRIGHT + Fore.CYAN + f"  RECV: [{response.ByteSize()} bytes] {response_str}")
        print(line + Style.RESET_ALL)


async def dial(network: str, address: str, logger: Optional[logging.Logger] = None, print_traffic: bool = False) -> RiemannClient:
    """Connect to a Riemann server and return a ready RiemannClient"""
    return await RiemannClient.create(network, address, logger=logger, print_traffic=print_traffic)
