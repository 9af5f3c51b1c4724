"""
Shared fixtures for centapi tests.
"""

import json
from unittest.mock import MagicMock

import pytest

from centapi.api import CentClient
from centapi.config import CentConfig


def make_response(payload=None, status_code=200, reason="OK"):
    """Build a fake requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def echo_results(body=None):
    """Session.post side effect answering every command with ``body``."""
    def post(url, data=None, **kwargs):
        commands = json.loads(data)
        return make_response([{"body": body if body is not None else {}} for _ in commands])
    return post


def sent_commands(session):
    """Decode the JSON array posted in the last session.post call."""
    return json.loads(session.post.call_args.kwargs["data"])


@pytest.fixture
def config():
    return CentConfig(server_url="http://localhost:8000", secret="secret", timeout=5)


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(config, session):
    """Client whose HTTP session is a mock."""
    c = CentClient(config)
    c._http._session = session
    return c
