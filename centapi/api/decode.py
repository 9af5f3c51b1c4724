"""
Decoders for command response bodies.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..exceptions import DecodeError


@dataclass
class ClientInfo:
    """Connection information of a client subscribed to a channel."""
    user: str = ""
    client: str = ""
    default_info: Any = None
    channel_info: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientInfo":
        return cls(
            user=data.get("user", ""),
            client=data.get("client", ""),
            default_info=data.get("default_info"),
            channel_info=data.get("channel_info"),
        )


@dataclass
class Message:
    """A message stored in channel history."""
    uid: str = ""
    channel: str = ""
    data: Any = None
    client: str = ""
    info: Optional[ClientInfo] = None
    timestamp: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        info = data.get("info")
        return cls(
            uid=data.get("uid", ""),
            channel=data.get("channel", ""),
            data=data.get("data"),
            client=data.get("client", ""),
            info=ClientInfo.from_dict(info) if isinstance(info, dict) else None,
            timestamp=str(data.get("timestamp", "")),
        )


@dataclass
class NodeInfo:
    """Stats of one server node; everything but identity lives in ``metrics``."""
    uid: str = ""
    name: str = ""
    started_at: int = 0
    metrics: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeInfo":
        metrics = dict(data.get("metrics") or {})
        for key, value in data.items():
            if key not in ("uid", "name", "started_at", "metrics"):
                metrics.setdefault(key, value)
        return cls(
            uid=data.get("uid", ""),
            name=data.get("name", ""),
            started_at=data.get("started_at", 0),
            metrics=metrics,
        )


@dataclass
class Stats:
    """Server stats."""
    nodes: List[NodeInfo] = field(default_factory=list)
    metrics_interval: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stats":
        nodes = _expect(data.get("nodes") or [], list, "stats nodes")
        return cls(
            nodes=[NodeInfo.from_dict(_expect(n, dict, "stats node")) for n in nodes],
            metrics_interval=data.get("metrics_interval", 0),
        )


def _expect(value: Any, kind: type, what: str) -> Any:
    if not isinstance(value, kind):
        raise DecodeError(
            f"Cannot decode {what}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _data(body: Any, kind: type, what: str) -> Any:
    """Get the ``data`` member of a response body, or an empty value if absent."""
    if body is None:
        return kind()
    body = _expect(body, dict, f"{what} body")
    data = body.get("data")
    if data is None:
        return kind()
    return _expect(data, kind, what)


# No error in the response means success; the body of these methods
# carries nothing else yet.

def decode_publish(body: Any) -> bool:
    return True


def decode_broadcast(body: Any) -> bool:
    return True


def decode_unsubscribe(body: Any) -> bool:
    return True


def decode_disconnect(body: Any) -> bool:
    return True


def decode_presence(body: Any) -> Dict[str, ClientInfo]:
    """Decode a presence body into a map of client ID to client info."""
    data = _data(body, dict, "presence")
    return {
        client_id: ClientInfo.from_dict(_expect(info, dict, "presence entry"))
        for client_id, info in data.items()
    }


def decode_history(body: Any) -> List[Message]:
    """Decode a history body into a list of messages."""
    data = _data(body, list, "history")
    return [Message.from_dict(_expect(item, dict, "history message")) for item in data]


def decode_channels(body: Any) -> List[str]:
    """Decode a channels body into a list of active channel names."""
    data = _data(body, list, "channels")
    return [_expect(ch, str, "channel name") for ch in data]


def decode_stats(body: Any) -> Stats:
    return Stats.from_dict(_data(body, dict, "stats"))
