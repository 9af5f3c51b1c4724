"""
Centrifugo API Client - Main facade for all API operations.

Commands can be queued with the ``add_*`` methods and sent together with
``send()``, or sent one at a time with the single-command methods
(``publish()``, ``presence()``, ...), which decode the response for you.
"""

import threading
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar

from requests.adapters import HTTPAdapter

from ..config import CentConfig
from ..exceptions import ClientNotEmptyError, CommandError, MalformedResponseError
from . import commands as cmd
from ._http import HTTPClient
from .buffer import CommandBuffer
from .commands import Command, CommandResult
from .decode import (
    ClientInfo,
    Message,
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

T = TypeVar("T")


class CentClient:
    """
    Client for the Centrifugo HTTP API.

    Usage (single command):
        client = CentClient(CentConfig(server_url="http://localhost:8000", secret="secret"))
        ok = client.publish("$public:chat", {"input": "test"})
        presence = client.presence("$public:chat")

    Usage (batch):
        client.add_publish("$public:chat", {"input": "test1"})
        client.add_publish("$public:chat", {"input": "test2"})
        result = client.send()  # one CommandResult per command, same order

    Thread safety:
        The command buffer is safe to use from several threads. Single-command
        methods and ``send()`` are serialized by a client-wide lock, so two
        single-command calls never see each other's commands. ``add_*`` calls
        do not take that lock: a thread adding commands while another thread
        runs a single-command method can make that method fail with
        ``ClientNotEmptyError``, or have its added command sent along with the
        single command. Use one client per producer of batches, or coordinate
        access in the application.

    Failed sends:
        The buffer is emptied before the request is made. When sending fails,
        the raised ``BatchError`` carries the drained commands in
        ``error.commands``; pass them to ``requeue()`` to try again. Nothing
        is retried automatically since commands such as publish are not
        idempotent.
    """

    def __init__(
        self,
        config: Optional[CentConfig] = None,
        adapter: Optional[HTTPAdapter] = None
    ):
        """
        Initialize the API client.

        Args:
            config: Optional configuration. Uses global config if not provided.
            adapter: Optional transport adapter, e.g. with custom pool settings.
        """
        self._http = HTTPClient(config, adapter)
        self._buffer = CommandBuffer()
        self._call_lock = threading.RLock()

    @property
    def config(self) -> CentConfig:
        """Get the configuration."""
        return self._http.config

    @property
    def endpoint(self) -> str:
        """Get the API endpoint URL."""
        return self._http.endpoint

    @property
    def pending(self) -> int:
        """Number of queued commands."""
        return len(self._buffer)

    def is_empty(self) -> bool:
        return self._buffer.is_empty()

    def reset(self) -> None:
        """Drop all queued commands."""
        self._buffer.clear()

    # ========== Command Buffer ==========

    def add(self, request: Any) -> Command:
        """Queue a request (any of the types in ``centapi.api.commands``)."""
        return self._buffer.append(request)

    def requeue(self, commands: Iterable[Command]) -> None:
        """
        Queue commands of a failed batch again, keeping their uids.

        Commands go to the tail of the buffer, so anything added after the
        failed ``send()`` is sent ahead of them.
        """
        self._buffer.extend(commands)

    def add_publish(self, channel: str, data: Any) -> Command:
        return self.add(cmd.Publish(channel, data))

    def add_publish_client(self, channel: str, data: Any, client: str) -> Command:
        """Queue a publish on behalf of client connection ``client``."""
        return self.add(cmd.Publish(channel, data, client))

    def add_broadcast(self, channels: Sequence[str], data: Any) -> Command:
        return self.add(cmd.Broadcast(list(channels), data))

    def add_broadcast_client(self, channels: Sequence[str], data: Any, client: str) -> Command:
        return self.add(cmd.Broadcast(list(channels), data, client))

    def add_unsubscribe(self, channel: str, user: str) -> Command:
        return self.add(cmd.Unsubscribe(channel, user))

    def add_disconnect(self, user: str) -> Command:
        return self.add(cmd.Disconnect(user))

    def add_presence(self, channel: str) -> Command:
        return self.add(cmd.Presence(channel))

    def add_history(self, channel: str) -> Command:
        return self.add(cmd.History(channel))

    def add_channels(self) -> Command:
        return self.add(cmd.Channels())

    def add_stats(self) -> Command:
        return self.add(cmd.Stats())

    def send(self) -> List[CommandResult]:
        """
        Send all queued commands in one request.

        Returns:
            One result per command in queue order. Results are not checked
            for errors; inspect ``result.error`` and decode ``result.body``
            with the functions in ``centapi.api.decode``.

        Raises:
            BatchError: The request failed; ``error.commands`` holds the batch
        """
        with self._call_lock:
            commands = self._buffer.drain_all()
            return self._http.send_batch(commands)

    # ========== Single Commands ==========

    def _call(self, request: Any, decode: Callable[[Any], T]) -> T:
        with self._call_lock:
            if not self._buffer.is_empty():
                raise ClientNotEmptyError()

            self._buffer.append(request)
            result = self.send()

        if len(result) != 1:
            raise MalformedResponseError(details=f"Expected 1 result, got {len(result)}")

        resp = result[0]
        if resp.error:
            raise CommandError(resp.error, resp)

        return decode(resp.body)

    def publish(self, channel: str, data: Any) -> bool:
        """
        Publish data into a channel.

        Args:
            channel: Channel name
            data: JSON-serializable value, or bytes holding encoded JSON

        Returns:
            True on success
        """
        return self._call(cmd.Publish(channel, data), decode_publish)

    def publish_client(self, channel: str, data: Any, client: str) -> bool:
        """Publish data into a channel on behalf of client connection ``client``."""
        return self._call(cmd.Publish(channel, data, client), decode_publish)

    def broadcast(self, channels: Sequence[str], data: Any) -> bool:
        """Publish the same data into several channels."""
        return self._call(cmd.Broadcast(list(channels), data), decode_broadcast)

    def broadcast_client(self, channels: Sequence[str], data: Any, client: str) -> bool:
        return self._call(cmd.Broadcast(list(channels), data, client), decode_broadcast)

    def unsubscribe(self, channel: str, user: str) -> bool:
        """Unsubscribe a user from a channel."""
        return self._call(cmd.Unsubscribe(channel, user), decode_unsubscribe)

    def disconnect(self, user: str) -> bool:
        """Disconnect a user."""
        return self._call(cmd.Disconnect(user), decode_disconnect)

    def presence(self, channel: str) -> Dict[str, ClientInfo]:
        """Get clients subscribed to a channel, keyed by client ID."""
        return self._call(cmd.Presence(channel), decode_presence)

    def history(self, channel: str) -> List[Message]:
        """Get messages kept in channel history."""
        return self._call(cmd.History(channel), decode_history)

    def channels(self) -> List[str]:
        """Get active channels (with one or more subscribers)."""
        return self._call(cmd.Channels(), decode_channels)

    def stats(self) -> Stats:
        return self._call(cmd.Stats(), decode_stats)

    # ========== Context Manager ==========

    def close(self) -> None:
        """Close the HTTP session."""
        self._http.close()

    def __enter__(self) -> "CentClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


# Convenience function for quick API access
def get_client(
    config: Optional[CentConfig] = None,
    adapter: Optional[HTTPAdapter] = None
) -> CentClient:
    """
    Get an API client instance.

    Args:
        config: Optional configuration
        adapter: Optional transport adapter

    Returns:
        CentClient instance
    """
    return CentClient(config, adapter)
