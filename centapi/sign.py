"""
HMAC-SHA256 signing helpers.

These are used both by the API client (request signing) and by backends
that hand out credentials to connecting clients (connection tokens and
private channel signatures). The segment order of every multi-part
signature must match what the server computes.
"""

import hashlib
import hmac
from typing import Union

BytesLike = Union[str, bytes]


def _to_bytes(value: BytesLike) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def _sign(secret: BytesLike, *segments: BytesLike) -> str:
    sign = hmac.new(_to_bytes(secret), digestmod=hashlib.sha256)
    for segment in segments:
        sign.update(_to_bytes(segment))
    return sign.hexdigest()


def generate_api_sign(secret: BytesLike, data: BytesLike) -> str:
    """Generate the X-API-Sign value for an HTTP API request body."""
    return _sign(secret, data)


def verify_api_sign(secret: BytesLike, data: BytesLike, sign: str) -> bool:
    """Check a received X-API-Sign value in constant time."""
    return hmac.compare_digest(generate_api_sign(secret, data), sign)


def generate_client_token(
    secret: BytesLike,
    user: BytesLike,
    timestamp: BytesLike,
    info: BytesLike = ""
) -> str:
    """
    Generate a connection token for a client.

    Args:
        secret: Project secret shared with the server
        user: User ID
        timestamp: Unix timestamp as a string
        info: Optional JSON string with additional connection info

    Returns:
        Hex encoded token
    """
    return _sign(secret, user, timestamp, info)


def generate_channel_sign(
    secret: BytesLike,
    client: BytesLike,
    channel: BytesLike,
    channel_data: BytesLike = ""
) -> str:
    """
    Generate a signature granting a client access to a private channel.

    Args:
        secret: Project secret shared with the server
        client: Client connection ID
        channel: Private channel name
        channel_data: Optional JSON string with channel specific info

    Returns:
        Hex encoded signature
    """
    return _sign(secret, client, channel, channel_data)
