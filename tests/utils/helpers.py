"""Test helper functions."""

import json
from io import BytesIO
from typing import Any, Dict, Optional, Tuple


class MockSocket:
    """Socket stand-in: serves one raw request and records everything sent back."""

    def __init__(self, request: bytes):
        self._request = request
        self.sent = bytearray()

    def makefile(self, *args, **kwargs):
        return BytesIO(self._request)

    def sendall(self, data):
        self.sent.extend(data)

    def close(self):
        pass


def build_http_request(
    method: str,
    path: str,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None
) -> bytes:
    """Raw HTTP/1.1 request bytes; dict/list bodies are JSON-encoded."""
    if body is None:
        payload = b""
    elif isinstance(body, (bytes, str)):
        payload = body.encode('utf-8') if isinstance(body, str) else body
    else:
        payload = json.dumps(body).encode('utf-8')

    lines = [f"{method} {path} HTTP/1.1", "Host: localhost", "Connection: close"]
    if payload:
        lines.append("Content-Type: application/json")
        lines.append(f"Content-Length: {len(payload)}")
    for name, value in (headers or {}).items():
        lines.append(f"{name}: {value}")
    return ("\r\n".join(lines) + "\r\n\r\n").encode('utf-8') + payload


def parse_http_response(raw: bytes) -> Tuple[int, Dict[str, str], bytes]:
    """Split a raw response into (status, lower-cased headers, body)."""
    head, _, body = raw.partition(b"\r\n\r\n")
    lines = head.decode('iso-8859-1').split("\r\n")
    status = int(lines[0].split()[1])
    headers = {}
    for line in lines[1:]:
        name, _, value = line.partition(":")
        headers[name.strip().lower()] = value.strip()
    return status, headers, body


def call_handler(handler_cls, method: str, path: str, body: Any = None,
                 headers: Optional[Dict[str, str]] = None) -> Tuple[int, Dict[str, str], bytes]:
    """Run one request through a BaseHTTPRequestHandler subclass."""
    sock = MockSocket(build_http_request(method, path, body, headers))
    handler_cls(sock, ("127.0.0.1", 8000), None)
    return parse_http_response(bytes(sock.sent))
