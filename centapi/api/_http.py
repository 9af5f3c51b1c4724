"""
Base HTTP client for the Centrifugo API.

Handles the session, request signing and batch encoding/decoding.
"""

import json
import logging
from typing import Any, List, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .. import __version__
from ..config import CentConfig, get_config
from ..exceptions import (
    MalformedResponseError,
    SerializationError,
    TransportError,
)
from ..sign import generate_api_sign
from .commands import Command, CommandResult

logger = logging.getLogger(__name__)

SIGN_HEADER = "X-API-Sign"


def api_endpoint(server_url: str) -> str:
    """Normalize a server address to its API endpoint (``<base>/api/``)."""
    addr = server_url.rstrip("/")
    if not addr.endswith("/api"):
        addr = addr + "/api"
    return addr + "/"


class HTTPClient:
    """
    Base HTTP client for the Centrifugo API.

    Handles:
    - Session management with a sized connection pool
    - Request signing (skipped in insecure mode)
    - Batch serialization and response correlation
    """

    def __init__(
        self,
        config: Optional[CentConfig] = None,
        adapter: Optional[HTTPAdapter] = None
    ):
        """
        Initialize the HTTP client.

        Args:
            config: Optional configuration. Uses global config if not provided.
            adapter: Optional transport adapter mounted instead of the default one.
        """
        self.config = config or get_config()
        self._adapter = adapter
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Get or create the HTTP session."""
        if self._session is None:
            self._session = requests.Session()

            adapter = self._adapter
            if adapter is None:
                # Only connection setup is retried: a request that reached
                # the server may already have taken effect.
                retry_strategy = Retry(
                    total=self.config.connect_retries,
                    connect=self.config.connect_retries,
                    read=0,
                    status=0,
                    other=0,
                    backoff_factor=0.5,
                    allowed_methods=None,
                    raise_on_status=False,
                )
                adapter = HTTPAdapter(
                    pool_connections=self.config.pool_connections,
                    pool_maxsize=self.config.pool_maxsize,
                    max_retries=retry_strategy,
                )
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)

            self._session.headers.update({
                "User-Agent": f"centapi/{__version__}",
                "Accept": "application/json",
            })

        return self._session

    @property
    def endpoint(self) -> str:
        """Get the API endpoint URL."""
        return api_endpoint(self.config.server_url)

    def encode(self, commands: Sequence[Command]) -> bytes:
        """Encode commands as a JSON array, preserving order."""
        try:
            payload = [cmd.to_dict() for cmd in commands]
            return json.dumps(payload, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Cannot encode commands as JSON: {e}",
                commands=commands
            )

    def _get_headers(self, data: bytes) -> dict:
        headers = {"Content-Type": "application/json"}
        if not self.config.insecure:
            headers[SIGN_HEADER] = generate_api_sign(self.config.secret, data)
        return headers

    def send_batch(self, commands: Sequence[Command]) -> List[CommandResult]:
        """
        Send commands in one POST request.

        Args:
            commands: Commands in the order they were queued

        Returns:
            One result per command, in the same order

        Raises:
            SerializationError: Params are not JSON serializable (nothing sent)
            TransportError: Connection failure, timeout or non-200 status
            MalformedResponseError: Response is not an array of one result per command
        """
        if not commands:
            return []

        data = self.encode(commands)
        headers = self._get_headers(data)

        logger.debug(f"Request: POST {self.endpoint} ({len(commands)} commands)")

        try:
            response = self.session.post(
                self.endpoint,
                data=data,
                headers=headers,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection failed: {e}", commands=commands)
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out: {e}", commands=commands)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}", commands=commands)

        logger.debug(f"Response: {response.status_code}")

        if response.status_code != 200:
            raise TransportError(
                f"wrong status code: {response.status_code} {response.reason or ''}".rstrip(),
                status_code=response.status_code,
                commands=commands
            )

        return self._decode(response, commands)

    def _decode(
        self,
        response: requests.Response,
        commands: Sequence[Command]
    ) -> List[CommandResult]:
        try:
            payload: Any = response.json()
        except ValueError as e:
            raise MalformedResponseError(details=f"Invalid JSON: {e}", commands=commands)

        if not isinstance(payload, list):
            raise MalformedResponseError(
                details=f"Expected a JSON array, got {type(payload).__name__}",
                commands=commands
            )

        if len(payload) != len(commands):
            raise MalformedResponseError(
                details=f"Sent {len(commands)} commands, got {len(payload)} results",
                commands=commands
            )

        try:
            return [CommandResult.from_dict(item) for item in payload]
        except ValueError as e:
            raise MalformedResponseError(details=str(e), commands=commands)

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
