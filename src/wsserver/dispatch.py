"""Routes one delivered chunk to the handshake or frame path"""

from __future__ import annotations
from wsutils.types import ChunkKind, ProtocolError, BytesLike
from wsutils.logging import get_logger
from wsutils.config import WS_REPLY_MESSAGE
from wsserver.classifier import classify
from wsserver.handshake import negotiate
from wsserver.codec import decode, encode

logger = get_logger(__name__)


def handle_chunk(chunk: BytesLike, reply: str = WS_REPLY_MESSAGE) -> bytes | None:
    """
    Produces the bytes to write back for one chunk, or None to write nothing.

    Upgrade requests get a handshake response, data frames get `reply` as a
    text frame. Plain HTTP requests, frames that fail to decode and replies
    that cannot be encoded are only logged.
    """
    if not chunk:
        return None

    kind = classify(chunk)
    if kind is ChunkKind.UPGRADE_REQUEST:
        logger.info("Received upgrade request:\n%s", bytes(chunk).decode("latin-1"))
        response = negotiate(chunk)
        logger.info("Replied with:\n%s", response.decode("latin-1"))
        return response

    if kind is ChunkKind.PLAIN_HTTP:
        logger.info("Received non-upgrade HTTP request:\n%s", bytes(chunk).decode("latin-1"))
        return None

    try:
        message = decode(chunk)
    except ProtocolError as e:
        logger.warning("Dropping undecodable frame: %s", e)
        return None
    logger.info("Received message: %s", message)

    try:
        frame = encode(reply)
    except (ProtocolError, UnicodeEncodeError) as e:
        logger.warning("Cannot encode reply, sending nothing: %s", e)
        return None
    logger.info("Replied with message: %s", reply)
    return frame
