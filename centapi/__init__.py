"""
Centrifugo HTTP API client.

Send server-side commands (publish, broadcast, unsubscribe, disconnect,
presence, history, channels, stats) to a Centrifugo-style real-time
messaging server, either one at a time or batched into a single signed
POST request.

Usage:
    from centapi import CentClient, CentConfig

    client = CentClient(CentConfig(server_url="http://localhost:8000", secret="secret"))
    client.publish("$public:chat", {"input": "test"})

    client.add_publish("$public:chat", {"input": "test1"})
    client.add_publish("$public:chat", {"input": "test2"})
    result = client.send()
"""

__version__ = "1.0.0"
__prog_name__ = "cent"

from .config import CentConfig, ConfigManager, get_config, get_config_manager
from .api import CentClient, get_client
from .sign import generate_api_sign, generate_channel_sign, generate_client_token

__all__ = [
    "__version__",
    "CentClient",
    "get_client",
    "CentConfig",
    "ConfigManager",
    "get_config",
    "get_config_manager",
    "generate_api_sign",
    "generate_channel_sign",
    "generate_client_token",
]
