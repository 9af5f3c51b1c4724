"""
Tests for CLI commands.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from centapi.api.commands import Command, CommandResult
from centapi.api.decode import ClientInfo, Message, NodeInfo, Stats
from centapi.cli import cli
from centapi.config import CentConfig
from centapi.exceptions import ClientNotEmptyError, CommandError, TransportError
from centapi.sign import generate_channel_sign, generate_client_token


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_config():
    """Create mock configuration."""
    with patch('centapi.cli.get_config_manager') as mock:
        config_manager = MagicMock()
        config_manager.get.return_value = CentConfig(
            server_url="http://localhost:8000",
            secret="secret",
            timeout=5,
        )
        mock.return_value = config_manager
        yield config_manager


@pytest.fixture
def mock_client():
    """Patch the API client used by the messaging commands."""
    with patch('centapi.commands.messaging.CentClient') as mock_cls:
        instance = MagicMock()
        instance.__enter__ = MagicMock(return_value=instance)
        instance.__exit__ = MagicMock(return_value=False)
        mock_cls.return_value = instance
        yield instance


class TestCLI:
    """Tests for main CLI."""

    def test_version(self, runner):
        """Test version option."""
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert 'cent' in result.output.lower()

    def test_help(self, runner):
        """Test help output."""
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'Centrifugo' in result.output


class TestConfigureCommand:
    """Tests for configure command."""

    def test_configure_show(self, runner, mock_config):
        """Test showing current configuration."""
        result = runner.invoke(cli, ['configure', '--show'])
        assert result.exit_code == 0
        assert 'Configuration' in result.output
        assert 'secret' not in result.output

    def test_configure_with_options(self, runner, mock_config):
        """Test configuration with options."""
        result = runner.invoke(cli, [
            'configure',
            '--server', 'http://cent:8000',
            '--secret', 'abc',
            '--insecure',
        ])
        assert result.exit_code == 0
        mock_config.update.assert_called_once_with(
            server_url='http://cent:8000', secret='abc', insecure=True
        )


class TestNotConfigured:
    """Tests for commands without configuration."""

    def test_publish_not_configured(self, runner):
        """Test publish when no secret is set."""
        with patch('centapi.cli.get_config_manager') as mock:
            config_manager = MagicMock()
            config_manager.get.return_value = CentConfig(secret="")
            mock.return_value = config_manager

            result = runner.invoke(cli, ['publish', 'ch', '1'])
            assert result.exit_code == 1
            assert 'not configured' in result.output.lower()


class TestPublishCommand:
    """Tests for publish and broadcast."""

    def test_publish_json(self, runner, mock_config, mock_client):
        """Test JSON data is parsed before publishing."""
        mock_client.publish.return_value = True

        result = runner.invoke(cli, ['publish', '$public:chat', '{"input": "test"}'])

        assert result.exit_code == 0
        mock_client.publish.assert_called_once_with('$public:chat', {'input': 'test'})
        assert 'Published' in result.output

    def test_publish_plain_text(self, runner, mock_config, mock_client):
        """Test non-JSON data is sent as a string."""
        result = runner.invoke(cli, ['publish', 'news', 'hello'])
        assert result.exit_code == 0
        mock_client.publish.assert_called_once_with('news', 'hello')

    def test_publish_with_client(self, runner, mock_config, mock_client):
        """Test --client uses publish_client."""
        result = runner.invoke(cli, ['publish', 'news', '1', '--client', 'c1'])
        assert result.exit_code == 0
        mock_client.publish_client.assert_called_once_with('news', 1, 'c1')

    def test_publish_command_error(self, runner, mock_config, mock_client):
        """Test server error is reported."""
        mock_client.publish.side_effect = CommandError("namespace not found")

        result = runner.invoke(cli, ['publish', 'bad:ch', '1'])

        assert result.exit_code == 1
        assert 'namespace not found' in result.output

    def test_publish_transport_error(self, runner, mock_config, mock_client):
        """Test transport error is reported."""
        mock_client.publish.side_effect = TransportError("Connection failed: refused")

        result = runner.invoke(cli, ['publish', 'ch', '1'])

        assert result.exit_code == 1
        assert 'Connection failed' in result.output

    def test_broadcast(self, runner, mock_config, mock_client):
        """Test broadcast to several channels."""
        result = runner.invoke(cli, ['broadcast', 'a', 'b', '--data', '{"x": 1}', '-f', 'json'])
        assert result.exit_code == 0
        mock_client.broadcast.assert_called_once_with(['a', 'b'], {'x': 1})
        assert json.loads(result.output) == {'success': True}


class TestConnectionCommands:
    """Tests for unsubscribe and disconnect."""

    def test_unsubscribe(self, runner, mock_config, mock_client):
        """Test unsubscribe."""
        result = runner.invoke(cli, ['unsubscribe', 'ch', '42'])
        assert result.exit_code == 0
        mock_client.unsubscribe.assert_called_once_with('ch', '42')

    def test_disconnect(self, runner, mock_config, mock_client):
        """Test disconnect."""
        result = runner.invoke(cli, ['disconnect', '42'])
        assert result.exit_code == 0
        mock_client.disconnect.assert_called_once_with('42')


class TestQueryCommands:
    """Tests for presence, history, channels and stats."""

    def test_presence(self, runner, mock_config, mock_client):
        """Test presence table."""
        mock_client.presence.return_value = {
            'c1': ClientInfo(user='42', client='c1'),
        }
        result = runner.invoke(cli, ['presence', 'ch'])
        assert result.exit_code == 0
        assert 'c1' in result.output
        assert '42' in result.output

    def test_history_json(self, runner, mock_config, mock_client):
        """Test history as JSON."""
        mock_client.history.return_value = [Message(uid='m1', channel='ch', data={'t': 1})]
        result = runner.invoke(cli, ['history', 'ch', '-f', 'json'])
        assert result.exit_code == 0
        assert json.loads(result.output)[0]['uid'] == 'm1'

    def test_channels(self, runner, mock_config, mock_client):
        """Test channels list."""
        mock_client.channels.return_value = ['news', 'chat']
        result = runner.invoke(cli, ['channels'])
        assert result.exit_code == 0
        assert 'news' in result.output
        assert 'chat' in result.output

    def test_stats(self, runner, mock_config, mock_client):
        """Test stats table."""
        mock_client.stats.return_value = Stats(
            nodes=[NodeInfo(uid='n1', name='node-1', metrics={'num_clients': 7})],
            metrics_interval=60,
        )
        result = runner.invoke(cli, ['stats'])
        assert result.exit_code == 0
        assert 'node-1' in result.output
        assert '7' in result.output

    def test_not_empty_error(self, runner, mock_config, mock_client):
        """Test precondition error is reported."""
        mock_client.channels.side_effect = ClientNotEmptyError()
        result = runner.invoke(cli, ['channels'])
        assert result.exit_code == 1
        assert 'buffer not empty' in result.output


class TestBatchCommand:
    """Tests for batch command."""

    def test_batch(self, runner, mock_config, mock_client, tmp_path):
        """Test commands from file are sent in one request."""
        batch_file = tmp_path / "batch.json"
        batch_file.write_text(json.dumps([
            {"method": "publish", "params": {"channel": "news", "data": {"n": 1}}},
            {"method": "channels"},
        ]))
        mock_client.add.side_effect = [
            Command("u1", "publish", {}),
            Command("u2", "channels", {}),
        ]
        mock_client.send.return_value = [
            CommandResult(body={}),
            CommandResult(body={"data": ["news"]}),
        ]

        result = runner.invoke(cli, ['batch', str(batch_file), '-f', 'json'])

        assert result.exit_code == 0
        assert mock_client.add.call_count == 2
        mock_client.send.assert_called_once()
        output = json.loads(result.output)
        assert [item['method'] for item in output] == ['publish', 'channels']

    def test_batch_with_failures(self, runner, mock_config, mock_client, tmp_path):
        """Test exit code when a command fails."""
        batch_file = tmp_path / "batch.json"
        batch_file.write_text(json.dumps([{"method": "disconnect", "params": {"user": "42"}}]))
        mock_client.add.return_value = Command("u1", "disconnect", {"user": "42"})
        mock_client.send.return_value = [CommandResult(error="permission denied")]

        result = runner.invoke(cli, ['batch', str(batch_file)])

        assert result.exit_code == 1
        assert 'permission denied' in result.output

    def test_batch_invalid_file(self, runner, mock_config, mock_client, tmp_path):
        """Test unknown method in batch file."""
        batch_file = tmp_path / "batch.json"
        batch_file.write_text(json.dumps([{"method": "explode"}]))

        result = runner.invoke(cli, ['batch', str(batch_file)])

        assert result.exit_code == 1
        assert 'Unknown method' in result.output
        mock_client.send.assert_not_called()


class TestTokenCommands:
    """Tests for token and channel-sign."""

    def test_token(self, runner, mock_config):
        """Test connection token generation."""
        result = runner.invoke(cli, ['token', '42', '--timestamp', '1500000000', '-q'])
        assert result.exit_code == 0
        assert result.output.strip() == generate_client_token('secret', '42', '1500000000', '')

    def test_channel_sign(self, runner, mock_config):
        """Test private channel sign."""
        result = runner.invoke(cli, ['channel-sign', 'c1', '$private', '-d', '{"a":1}'])
        assert result.exit_code == 0
        assert result.output.strip() == generate_channel_sign('secret', 'c1', '$private', '{"a":1}')

    def test_token_without_secret(self, runner, mock_config):
        """Test token needs a secret."""
        mock_config.get.return_value = CentConfig(secret="")
        result = runner.invoke(cli, ['token', '42'])
        assert result.exit_code == 1
        assert 'secret' in result.output.lower()
