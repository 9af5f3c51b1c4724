"""
Centrifugo API Client Package.

Structure:
    - client.py: Main CentClient facade (buffer + single commands)
    - _http.py: HTTP layer with session, signing and batch encoding
    - buffer.py: Thread-safe command buffer
    - commands.py: Request types, Command and CommandResult
    - decode.py: Response body decoders and value objects

Usage:
    from centapi.api import CentClient, get_client

    client = CentClient()
    client.publish("$public:chat", {"input": "test"})

    client.add_presence("$public:chat")
    client.add_history("$public:chat")
    presence_result, history_result = client.send()
"""

from .client import CentClient, get_client
from ._http import HTTPClient, api_endpoint
from .buffer import CommandBuffer
from .commands import (
    Broadcast,
    Channels,
    Command,
    CommandResult,
    Disconnect,
    History,
    Presence,
    Publish,
    Unsubscribe,
    request_from_dict,
)
from .decode import (
    ClientInfo,
    Message,
    NodeInfo,
    Stats,
    decode_broadcast,
    decode_channels,
    decode_disconnect,
    decode_history,
    decode_presence,
    decode_publish,
    decode_stats,
    decode_unsubscribe,
)

__all__ = [
    # Main client
    "CentClient",
    "get_client",
    # HTTP layer
    "HTTPClient",
    "api_endpoint",
    "CommandBuffer",
    # Requests
    "Publish",
    "Broadcast",
    "Unsubscribe",
    "Disconnect",
    "Presence",
    "History",
    "Channels",
    "Command",
    "CommandResult",
    "request_from_dict",
    # Responses
    "ClientInfo",
    "Message",
    "NodeInfo",
    "Stats",
    "decode_publish",
    "decode_broadcast",
    "decode_unsubscribe",
    "decode_disconnect",
    "decode_presence",
    "decode_history",
    "decode_channels",
    "decode_stats",
]
