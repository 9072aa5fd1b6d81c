"""HandshakeNegotiator tests."""

from __future__ import annotations

from wsserver.handshake import compute_accept, extract_key, format_http_response, negotiate, BAD_REQUEST


def _request(*headers: str) -> bytes:
    lines = ["GET /chat HTTP/1.1", "Host: localhost:8765", "Upgrade: websocket", "Connection: Upgrade", *headers]
    return ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1")


def test_compute_accept_rfc_vector():
    assert compute_accept("dGhlIHNhbXBsZSBub25jZQ==") == "s3pPLMBiTxaQ9kYGzzhZRbK+xOo="


def test_negotiate_switches_protocols():
    response = negotiate(_request("Sec-WebSocket-Key: dGhlIHNhbXBsZSBub25jZQ==", "Sec-WebSocket-Version: 13"))
    assert response == (
        b"HTTP/1.1 101 Switching Protocols\r\n"
        b"Upgrade: websocket\r\n"
        b"Connection: Upgrade\r\n"
        b"Sec-WebSocket-Accept: s3pPLMBiTxaQ9kYGzzhZRbK+xOo=\r\n"
        b"\r\n"
    )


def test_negotiate_accept_matches_derivation():
    key = "x3JJHMbDL1EzLkh9GBhXDw=="
    response = negotiate(_request(f"Sec-WebSocket-Key: {key}"))
    status_line, _, rest = response.partition(b"\r\n")
    assert status_line == b"HTTP/1.1 101 Switching Protocols"
    assert f"Sec-WebSocket-Accept: {compute_accept(key)}\r\n".encode() in rest
    assert response.endswith(b"\r\n\r\n")


def test_negotiate_missing_key_is_bad_request():
    assert negotiate(_request("Sec-WebSocket-Version: 13")) == b"HTTP/1.1 400 Bad Request"
    assert BAD_REQUEST == b"HTTP/1.1 400 Bad Request"


def test_negotiate_empty_key_is_bad_request():
    assert negotiate(_request("Sec-WebSocket-Key: ")) == BAD_REQUEST


def test_extract_key_strips_prefix_and_last_byte():
    assert extract_key(_request("Sec-WebSocket-Key: abc==")) == "abc=="
    # Without a CR the final byte of the value is still dropped
    assert extract_key(b"GET / HTTP/1.1\nSec-WebSocket-Key: abcd\n") == "abc"


def test_extract_key_requires_exact_header_prefix():
    assert extract_key(_request("sec-websocket-key: abc==")) is None
    assert extract_key(_request("X-Sec-WebSocket-Key: abc==")) is None


def test_extract_key_last_header_wins():
    chunk = _request("Sec-WebSocket-Key: first==", "Sec-WebSocket-Key: second==")
    assert extract_key(chunk) == "second=="


def test_key_format_is_not_validated():
    response = negotiate(_request("Sec-WebSocket-Key: not base64 at all"))
    assert response.startswith(b"HTTP/1.1 101 Switching Protocols\r\n")


def test_format_http_response_terminates_headers():
    raw = format_http_response(101, {"Upgrade": "websocket"})
    assert raw == b"HTTP/1.1 101 Switching Protocols\r\nUpgrade: websocket\r\n\r\n"
