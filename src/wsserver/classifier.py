"""Module for telling handshake requests apart from data frames"""

from __future__ import annotations
from collections.abc import Iterator
from wsutils.types import ChunkKind, BytesLike

HTTP_VERSION = b"HTTP/1.1"
UPGRADE_HEADER = b"Upgrade: websocket"


def iter_lines(chunk: BytesLike) -> Iterator[bytes]:
    """
    Yields the newline-delimited lines of a chunk.

    Line terminators are not included; a CR before the newline is kept.
    Nothing is decoded, so binary frames pass through untouched.
    """
    data = bytes(chunk)
    start = 0
    while True:
        end = data.find(b"\n", start)
        if end == -1:
            yield data[start:]
            return
        yield data[start:end]
        start = end + 1


def is_http(chunk: BytesLike) -> bool:
    """True if the first line of the chunk names HTTP/1.1."""
    first_line = next(iter_lines(chunk))
    return HTTP_VERSION in first_line


def is_upgrade_request(chunk: BytesLike) -> bool:
    """True if any line of the chunk asks for a websocket upgrade."""
    return any(UPGRADE_HEADER in line for line in iter_lines(chunk))


def classify(chunk: BytesLike) -> ChunkKind:
    """
    Classifies a chunk delivered by the transport.

    Args:
        chunk: The raw bytes of one delivery.

    Returns:
        UPGRADE_REQUEST or PLAIN_HTTP for HTTP/1.1 requests, DATA_FRAME for anything else.
    """
    if not is_http(chunk):
        return ChunkKind.DATA_FRAME
    if is_upgrade_request(chunk):
        return ChunkKind.UPGRADE_REQUEST
    return ChunkKind.PLAIN_HTTP
