"""Module for all the types used throughout the WebSocket server"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TypeAlias


# === Classification ===

class ChunkKind(Enum):
    PLAIN_HTTP = "PLAIN_HTTP"
    UPGRADE_REQUEST = "UPGRADE_REQUEST"
    DATA_FRAME = "DATA_FRAME"


# === Protocol / Framing ===

# Only text frames are ever sent
class Opcode(IntEnum):
    TEXT = 0x1

# 4-byte masking key for client->server frames
MaskingKey: TypeAlias = bytes

@dataclass(slots=True, frozen=True)
class DecodedFrame:
    fin: bool
    # Raw low nibble of byte 0; not interpreted
    opcode: int
    # Recorded only, client frames are always unmasked with bytes 2-5
    masked: bool
    length: int
    masking_key: MaskingKey
    payload: bytes

    @property
    def text(self) -> str:
        # One code point per payload byte
        return self.payload.decode("latin-1")


# === Errors ===

class ProtocolError(Exception):
    """Raised for frames the codec cannot decode or encode."""

class MalformedFrameError(ProtocolError):
    """Raised when a chunk is shorter than its header or declared payload."""

class UnsupportedLengthError(ProtocolError):
    """Raised for extended lengths on decode or payloads over 65535 bytes on encode."""

# Other aliases
BytesLike: TypeAlias = bytes | bytearray | memoryview


# === Connection ===

class ConnectionState(Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
