"""Module for handling WebSocket handshakes"""

from __future__ import annotations
from wsutils.types import BytesLike
from wsutils.logging import get_logger
from wsserver.classifier import iter_lines
from hashlib import sha1
import base64

logger = get_logger(__name__)

GUID = "258EAFA5-E914-47DA-95CA-C5AB0DC85B11"
KEY_HEADER = b"Sec-WebSocket-Key:"
# Header name plus the single space that follows it
KEY_OFFSET = len(KEY_HEADER) + 1

BAD_REQUEST = b"HTTP/1.1 400 Bad Request"
REASONS = {
    101: "Switching Protocols",
    400: "Bad Request",
}


def extract_key(raw: BytesLike) -> str | None:
    """
    Extracts the Sec-WebSocket-Key value from a raw upgrade request.

    The value is the rest of the header line after "Sec-WebSocket-Key: ",
    minus its last byte (the CR of a CRLF line ending). When the header
    appears more than once the last occurrence is used.

    Args:
        raw: The raw HTTP request bytes.

    Returns:
        The key, or None if the header is missing or empty.
    """
    key = None
    for line in iter_lines(raw):
        if line.startswith(KEY_HEADER):
            key = line[KEY_OFFSET:-1].decode("latin-1")
    return key or None


def compute_accept(sec_websocket_key: str) -> str:
    """
    Computes the Sec-WebSocket-Accept value from the Sec-WebSocket-Key.

    Args:
        sec_websocket_key: The Sec-WebSocket-Key from the client request.

    Returns:
        The computed Sec-WebSocket-Accept value.
    """
    # RFC 6455: Sec-WebSocket-Accept = base64( SHA1( key + GUID ) )
    sha = sha1((sec_websocket_key + GUID).encode("latin-1")).digest()
    return base64.b64encode(sha).decode("ascii")


def format_http_response(status: int, headers: dict[str, str]) -> bytes:
    """
    Formats a status code and headers into raw HTTP response bytes.

    Args:
        status: The HTTP status code.
        headers: The response headers, in order.

    Returns:
        The raw HTTP response bytes, terminated by a blank line.
    """
    status_line = f"HTTP/1.1 {status} {REASONS.get(status, 'OK')}\r\n"
    header_lines = "".join(f"{key}: {value}\r\n" for key, value in headers.items())
    return (status_line + header_lines + "\r\n").encode("latin-1")


def negotiate(raw: BytesLike) -> bytes:
    """
    Builds the reply to a WebSocket upgrade request.

    Args:
        raw: The raw upgrade request bytes.

    Returns:
        A 101 Switching Protocols response, or "HTTP/1.1 400 Bad Request"
        when the request carries no Sec-WebSocket-Key.
    """
    key = extract_key(raw)
    if key is None:
        logger.warning("Missing Sec-WebSocket-Key header; rejecting upgrade")
        return BAD_REQUEST

    accept_value = compute_accept(key)
    logger.debug("Computed Sec-WebSocket-Accept %s", accept_value)
    return format_http_response(101, {
        "Upgrade": "websocket",
        "Connection": "Upgrade",
        "Sec-WebSocket-Accept": accept_value,
    })
