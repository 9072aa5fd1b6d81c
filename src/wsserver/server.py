from __future__ import annotations

import selectors
import socket
from wsutils.logging import get_logger, setup_logging
from wsutils.types import ConnectionState
from wsutils.config import WS_HOST, WS_PORT, WS_LOG_LEVEL
from wsserver.connection import Connection

logger = get_logger(__name__)

def _drop(sel: selectors.BaseSelector, conn: Connection) -> None:
    try:
        sel.unregister(conn.socket)
    except (KeyError, ValueError):
        pass


def run(host: str = WS_HOST, port: int = WS_PORT) -> None:
    sel = selectors.DefaultSelector()

    lsock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    lsock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    lsock.bind((host, port))
    lsock.listen()
    lsock.setblocking(False)
    sel.register(lsock, selectors.EVENT_READ, data="listener")

    logger.info("WebSocket server is listening on port %d (%s)", port, host)

    try:
        while True:
            events = sel.select(timeout=1.0)
            for key, mask in events:
                if key.data == "listener":
                    try:
                        cs, addr = lsock.accept()
                    except BlockingIOError:
                        continue
                    conn = Connection(cs, addr)
                    sel.register(cs, selectors.EVENT_READ, data=conn)
                    logger.info("Accepted connection from %s", addr)
                    continue

                c: Connection = key.data
                if mask & selectors.EVENT_READ:
                    c.on_readable()
                if mask & selectors.EVENT_WRITE:
                    c.on_writable()

                if c.state == ConnectionState.CLOSED:
                    _drop(sel, c)
                    continue

                # Update interest in WRITE based on queue
                newmask = selectors.EVENT_READ | (selectors.EVENT_WRITE if c.want_write else 0)
                if newmask != key.events:
                    sel.modify(c.socket, newmask, data=c)

    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        for key in list(sel.get_map().values()):
            if isinstance(key.data, Connection):
                key.data.close()
        sel.close()
        lsock.close()


def main() -> None:
    setup_logging(WS_LOG_LEVEL)
    run(WS_HOST, WS_PORT)


if __name__ == "__main__":
    main()
