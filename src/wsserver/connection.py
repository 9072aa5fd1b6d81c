"""
Connection handling module for one accepted TCP socket.
Each readable event is one chunk; replies are queued and flushed when writable.
"""

from __future__ import annotations

from socket import socket, SHUT_RDWR
from collections import deque
from typing import Callable

from wsutils.logging import get_connection_logger
from wsutils.types import ConnectionState
from wsutils.config import WS_RECV_BYTES
from wsserver.dispatch import handle_chunk

class Connection:
    """
    Owns a single client socket. Holds no protocol state between chunks:
    every chunk is classified and answered on its own.
    """

    def __init__(self, sock: socket, addr: tuple[str, int], recv_bytes: int = WS_RECV_BYTES,
                 handler: Callable[[bytes], bytes | None] = handle_chunk) -> None:
        self.socket = sock
        self.socket.setblocking(False)  # non-blocking
        self.addr = addr
        self.recv_bytes = recv_bytes
        self.handler = handler
        self.logger = get_connection_logger(addr)
        self.write_queue: deque[bytes] = deque()
        self.state = ConnectionState.OPEN
        self.logger.info("Connection created")

    def on_readable(self) -> None:
        """
        Handle a READ-ready event: read one chunk and queue the reply, if any.
        """
        if self.state != ConnectionState.OPEN:
            return
        try:
            chunk = self.socket.recv(self.recv_bytes)
        except BlockingIOError:
            return
        except OSError as e:
            self.logger.error("Recv error: %s", e)
            self.close()
            return
        if not chunk:
            self.logger.info("Peer closed connection")
            self.close()
            return

        response = self.handler(chunk)
        if response is not None:
            self.logger.debug("Replying with %d bytes", len(response))
            self.write_queue.append(response)

    def on_writable(self) -> None:
        """
        Handle a WRITE-ready event: send queued bytes without blocking.
        """
        while self.write_queue and self.state == ConnectionState.OPEN:
            buf = self.write_queue[0]
            try:
                sent = self.socket.send(buf)
            except BlockingIOError:
                # Nothing to write now; wait for next writable event
                return
            except OSError as e:
                self.logger.error("Send error: %s", e)
                self.close()
                return
            if sent == 0:
                self.logger.error("Socket write returned 0")
                self.close()
                return
            if sent < len(buf):
                # Keep the unsent tail
                self.write_queue[0] = buf[sent:]
                return
            self.write_queue.popleft()

    @property
    def want_write(self) -> bool:
        """Return True if there's data enqueued to send (register for EVENT_WRITE)."""
        return bool(self.write_queue)

    def close(self) -> None:
        """
        Close the underlying socket and transition to CLOSED.
        """
        if self.state == ConnectionState.CLOSED:
            return
        try:
            try:
                self.socket.shutdown(SHUT_RDWR)
            except OSError:
                pass
            self.socket.close()
        finally:
            self.state = ConnectionState.CLOSED
            self.write_queue.clear()
            self.logger.info("Connection closed")
