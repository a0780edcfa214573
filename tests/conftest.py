import asyncio
import contextlib
from typing import Callable, Optional

from riemann import Msg, ClientConst


class FakeRiemannServer:
    """Loopback TCP peer that answers each frame with responder(request)"""

    def __init__(self, responder: Callable[[Msg], Optional[bytes | Msg]], close_after_reply: bool = False, delay: float = 0.0):
        self.responder = responder
        self.delay = delay
        self.close_after_reply = close_after_reply
        self.requests: list[Msg] = []
        self.server: Optional[asyncio.Server] = None

    @property
    def address(self) -> str:
        host, port = self.server.sockets[0].getsockname()[:2]
        return f"{host}:{port}"

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        try:
            while True:
                header = await reader.readexactly(ClientConst.HEADER.size)
                (length,) = ClientConst.HEADER.unpack(header)
                request = Msg()
                request.ParseFromString(await reader.readexactly(length))
                self.requests.append(request)

                if self.delay:
                    await asyncio.sleep(self.delay)
                reply = self.responder(request)
                if reply is None:  # hang up without answering
                    break
                if isinstance(reply, bytes):
                    writer.write(reply)
                else:
                    data = reply.SerializeToString()
                    writer.write(ClientConst.HEADER.pack(len(data)) + data)
                await writer.drain()
                if self.close_after_reply:
                    break
        except (asyncio.IncompleteReadError, ConnectionError):
            pass
        finally:
            writer.close()

    async def __aenter__(self):
        self.server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.server.close()
        await self.server.wait_closed()


class DatagramCollector(asyncio.DatagramProtocol):
    def __init__(self):
        self.datagrams: asyncio.Queue = asyncio.Queue()

    def datagram_received(self, data, addr):
        self.datagrams.put_nowait(data)


@contextlib.asynccontextmanager
async def udp_peer():
    loop = asyncio.get_running_loop()
    transport, collector = await loop.create_datagram_endpoint(DatagramCollector, local_addr=("127.0.0.1", 0))
    try:
        host, port = transport.get_extra_info("sockname")[:2]
        collector.address = f"{host}:{port}"
        yield collector
    finally:
        transport.close()


def ok_response(*events) -> Msg:
    response = Msg(ok=True)
    response.events.extend(list(events))
    return response
