"""WebSocket frame encoding and decoding"""

from __future__ import annotations
import json
from wsutils.types import Opcode, MaskingKey, ProtocolError, DecodedFrame, BytesLike
from wsutils.logging import get_logger
from wsutils.validate import CLIENT_HEADER_SIZE, MAX_SHORT_LENGTH, validate_client_frame, validate_payload_length

logger = get_logger(__name__)

# FIN set, opcode text
TEXT_FRAME_HEADER = 0x80 | Opcode.TEXT.value
EXTENDED_LENGTH_16 = 126


def apply_mask(payload: BytesLike, masking_key: MaskingKey) -> bytes:
    """
    Masks / Unmasks the payload using the provided masking key.

    Args:
        payload: The payload to mask.
        masking_key: The masking key to use (must be 4 bytes).

    Returns:
        The masked payload.
    """
    if len(masking_key) != 4:
        raise ProtocolError("Invalid masking key length")
    return bytes(b ^ masking_key[i % 4] for i, b in enumerate(payload))


def decode_frame(chunk: BytesLike) -> DecodedFrame:
    """
    Decodes a masked client frame.

    The opcode is not interpreted and the mask bit is not checked: the four
    bytes after the length byte are always used as the masking key.

    Args:
        chunk: The raw frame bytes of one delivery.

    Returns:
        A DecodedFrame with the unmasked payload.
    """
    chunk = bytes(chunk)
    length = validate_client_frame(chunk)
    masking_key = chunk[2:CLIENT_HEADER_SIZE]
    payload = apply_mask(chunk[CLIENT_HEADER_SIZE:CLIENT_HEADER_SIZE + length], masking_key)
    return DecodedFrame(
        fin=(chunk[0] & 0x80) != 0,
        opcode=chunk[0] & 0x0F,
        masked=(chunk[1] & 0x80) != 0,
        length=length,
        masking_key=masking_key,
        payload=payload,
    )


def decode(chunk: BytesLike) -> str:
    """Decodes a masked client frame into its text payload."""
    return decode_frame(chunk).text


def encode(text: str) -> bytes:
    """
    Encodes text into an unmasked server text frame.

    The payload on the wire is the JSON string literal of the text.

    Args:
        text: The message to send.

    Returns:
        The frame bytes, ready to be written to the socket.
    """
    payload = json.dumps(text, ensure_ascii=False).encode("utf-8")
    validate_payload_length(len(payload))

    message = bytearray([TEXT_FRAME_HEADER])
    if len(payload) <= MAX_SHORT_LENGTH:
        message.append(len(payload))
    else:
        message.append(EXTENDED_LENGTH_16)
        message.extend(len(payload).to_bytes(2, byteorder="big"))
    message.extend(payload)
    return bytes(message)
