"""Module for all validation functions"""

from __future__ import annotations
from wsutils.types import MalformedFrameError, UnsupportedLengthError
from wsutils.logging import get_logger

# Client frame: 2 header bytes followed by a 4-byte masking key
CLIENT_HEADER_SIZE = 6
# Largest value of the 7-bit length field; 126 and 127 mark extended lengths
MAX_SHORT_LENGTH = 125
MAX_EXTENDED_LENGTH = 0xFFFF

logger = get_logger(__name__)

def validate_client_frame(chunk: bytes) -> int:
    """
    Check that a client frame fits in the chunk it was delivered in.

    Only the 7-bit length form is accepted; the extended markers are
    rejected instead of being read as a literal payload size.

    Args:
        chunk: The raw frame bytes.

    Returns:
        The declared payload length.
    """
    if len(chunk) < CLIENT_HEADER_SIZE:
        logger.debug("Frame header truncated: %d bytes", len(chunk))
        raise MalformedFrameError("Frame too short for header and masking key")

    length = chunk[1] & 0x7F
    if length > MAX_SHORT_LENGTH:
        logger.debug("Extended payload length marker: %d", length)
        raise UnsupportedLengthError("Extended payload lengths are not supported")

    if len(chunk) < CLIENT_HEADER_SIZE + length:
        logger.debug("Declared length %d exceeds available %d bytes", length, len(chunk) - CLIENT_HEADER_SIZE)
        raise MalformedFrameError("Frame too short for specified payload length")
    return length


def validate_payload_length(length: int) -> None:
    """Reject outgoing payloads that do not fit the 16-bit extended length."""
    if length > MAX_EXTENDED_LENGTH:
        logger.debug("Payload too large: %d", length)
        raise UnsupportedLengthError("Payloads over 65535 bytes are not supported")
