"""
API command types.

Each server method has its own request type; a request becomes a
``Command`` once it is given a uid and placed in the command buffer.
"""

import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Sequence

from ..exceptions import SerializationError


def _json_data(data: Any) -> Any:
    # bytes are already encoded JSON
    if isinstance(data, (bytes, bytearray)):
        try:
            return json.loads(bytes(data).decode("utf-8"))
        except ValueError as e:
            raise SerializationError(f"Data is not valid encoded JSON: {e}")
    return data


@dataclass(frozen=True)
class Publish:
    """Publish data into a channel."""
    method: ClassVar[str] = "publish"

    channel: str
    data: Any
    client: Optional[str] = None

    def params(self) -> Dict[str, Any]:
        params = {"channel": self.channel, "data": _json_data(self.data)}
        if self.client:
            params["client"] = self.client
        return params


@dataclass(frozen=True)
class Broadcast:
    """Publish the same data into several channels."""
    method: ClassVar[str] = "broadcast"

    channels: Sequence[str]
    data: Any
    client: Optional[str] = None

    def params(self) -> Dict[str, Any]:
        params = {"channels": list(self.channels), "data": _json_data(self.data)}
        if self.client:
            params["client"] = self.client
        return params


@dataclass(frozen=True)
class Unsubscribe:
    """Unsubscribe a user from a channel."""
    method: ClassVar[str] = "unsubscribe"

    channel: str
    user: str

    def params(self) -> Dict[str, Any]:
        return {"channel": self.channel, "user": self.user}


@dataclass(frozen=True)
class Disconnect:
    """Disconnect all connections of a user."""
    method: ClassVar[str] = "disconnect"

    user: str

    def params(self) -> Dict[str, Any]:
        return {"user": self.user}


@dataclass(frozen=True)
class Presence:
    method: ClassVar[str] = "presence"

    channel: str

    def params(self) -> Dict[str, Any]:
        return {"channel": self.channel}


@dataclass(frozen=True)
class History:
    method: ClassVar[str] = "history"

    channel: str

    def params(self) -> Dict[str, Any]:
        return {"channel": self.channel}


@dataclass(frozen=True)
class Channels:
    method: ClassVar[str] = "channels"

    def params(self) -> Dict[str, Any]:
        return {}


@dataclass(frozen=True)
class Stats:
    method: ClassVar[str] = "stats"

    def params(self) -> Dict[str, Any]:
        return {}


REQUEST_TYPES = {
    cls.method: cls
    for cls in (Publish, Broadcast, Unsubscribe, Disconnect, Presence, History, Channels, Stats)
}


def request_from_dict(data: Dict[str, Any]) -> Any:
    """
    Build a typed request from a ``{"method": ..., "params": {...}}`` mapping.

    Raises:
        ValueError: If the method is unknown or params don't match it
    """
    method = data.get("method")
    cls = REQUEST_TYPES.get(method)  # type: ignore[arg-type]
    if cls is None:
        raise ValueError(f"Unknown method: {method!r}")

    params = data.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError(f"Params of {method} must be an object")

    try:
        return cls(**params)
    except TypeError as e:
        raise ValueError(f"Invalid params for {method}: {e}")


@dataclass(frozen=True)
class Command:
    """A request with its uid, as sent over the wire."""
    uid: str
    method: str
    params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, request: Any, uid: str) -> "Command":
        return cls(uid=uid, method=request.method, params=request.params())

    def to_dict(self) -> Dict[str, Any]:
        return {"uid": self.uid, "method": self.method, "params": self.params}


@dataclass
class CommandResult:
    """Server response for one command of a batch."""
    error: Optional[str] = None
    body: Any = None
    method: Optional[str] = None
    uid: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.error

    @classmethod
    def from_dict(cls, data: Any) -> "CommandResult":
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")
        return cls(
            error=data.get("error") or None,
            body=data.get("body"),
            method=data.get("method"),
            uid=data.get("uid"),
        )


Result = List[CommandResult]
