"""Runtime configuration for the WebSocket server.

Every value can be overridden through the environment:

    WS_HOST:          interface the listening socket binds to.
    WS_PORT:          TCP port of the listening socket.
    WS_LOG_LEVEL:     level name for the ``ws`` logger (DEBUG, INFO, ...).
    WS_RECV_BYTES:    size of a single ``recv`` call. One call is one chunk,
                      and one chunk is expected to hold one handshake request
                      or one data frame.
    WS_REPLY_MESSAGE: text sent back for every decoded data frame.
"""

from __future__ import annotations

import os

WS_HOST = os.getenv("WS_HOST", "127.0.0.1")
WS_PORT = int(os.getenv("WS_PORT", "8765"))
WS_LOG_LEVEL = os.getenv("WS_LOG_LEVEL", "INFO")
WS_RECV_BYTES = int(os.getenv("WS_RECV_BYTES", "4096"))
WS_REPLY_MESSAGE = os.getenv("WS_REPLY_MESSAGE", "Hello from a WebSocket Server!")
