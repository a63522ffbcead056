"""Request signing for the private endpoints of the exchange API."""

from __future__ import annotations

import base64
import hashlib
import hmac
import time

_BODY_METHODS = frozenset({"POST", "PUT"})

HEADER_KEY = "X-SBTC-APIKEY"
HEADER_NONCE = "X-SBTC-NONCE"
HEADER_SIGNATURE = "X-SBTC-SIGNATURE"


def _as_bytes(body: bytes | str | None) -> bytes:
    if body is None:
        return b""
    if isinstance(body, str):
        return body.encode("utf-8")
    return bytes(body)


def build_message(method: str, path: str, body: bytes | str | None, nonce: str) -> str:
    """Return the string to sign: ``METHOD PATH [BASE64_BODY] NONCE``.

    The base64-encoded body is only part of the message for POST and PUT.
    """
    parts = [method, path]
    if method.upper() in _BODY_METHODS:
        parts.append(base64.b64encode(_as_bytes(body)).decode("ascii"))
    parts.append(str(nonce))
    return " ".join(parts)


def sign(message: str, secret: str) -> str:
    """Return the hex HMAC-SHA384 of ``message`` keyed with ``secret``."""
    digest = hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha384)
    return digest.hexdigest()


def auth_headers(
    key: str,
    secret: str,
    method: str,
    path: str,
    body: bytes | str | None = None,
    nonce: str | None = None,
) -> dict[str, str]:
    """Return the authentication headers for a private request.

    A nonce based on the current time in nanoseconds is used when none is given.
    """
    if nonce is None:
        nonce = str(time.time_ns())
    message = build_message(method, path, body, nonce)
    return {
        HEADER_KEY: key,
        HEADER_NONCE: nonce,
        HEADER_SIGNATURE: sign(message, secret),
    }