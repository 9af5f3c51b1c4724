"""
Server API commands for cent.

Commands:
- publish, broadcast: Send data into channels
- unsubscribe, disconnect: Manage user connections
- presence, history, channels, stats: Query server state
- batch: Send many commands from a JSON file in one request
"""

import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import click

from ..api import CentClient, request_from_dict
from ..exceptions import CentError, CommandError
from ..utils import (
    OutputFormat,
    load_json_file,
    parse_json_value,
    setup_logging,
    truncate_string,
)
from . import (
    CentContext,
    common_options,
    pass_context,
    print_error,
    print_info,
    print_json,
    print_success,
    print_table,
    require_config,
)


def _run(ctx: CentContext, call: Callable[[CentClient], Any]) -> Any:
    """Run an API call with a fresh client, exiting on errors."""
    try:
        with CentClient(ctx.config_manager.get()) as client:
            return call(client)
    except CommandError as e:
        print_error(f"Server rejected command: {e}")
        sys.exit(1)
    except CentError as e:
        print_error(str(e), e.details)
        sys.exit(1)


def _report_ok(fmt: OutputFormat, quiet: bool, message: str) -> None:
    if fmt == OutputFormat.JSON:
        print_json({"success": True})
    elif not quiet:
        print_success(message)


def register_messaging_commands(cli: click.Group) -> None:
    """Register server API commands with the CLI."""

    @cli.command('publish')
    @common_options
    @click.argument('channel')
    @click.argument('data')
    @click.option('--client', '-c', help='Client connection ID the publication comes from')
    @pass_context
    @require_config
    def publish(
        ctx: CentContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        channel: str,
        data: str,
        client: Optional[str]
    ):
        """
        Publish DATA into CHANNEL.

        DATA is parsed as JSON; anything else is sent as a string.

        \b
        Examples:
          cent publish '$public:chat' '{"input": "hello"}'
          cent publish news hello --client 4f2b...
        """
        setup_logging(verbose, quiet)
        payload = parse_json_value(data)

        if client:
            _run(ctx, lambda c: c.publish_client(channel, payload, client))
        else:
            _run(ctx, lambda c: c.publish(channel, payload))

        _report_ok(OutputFormat(output_format), quiet, f"Published to {channel}.")

    @cli.command('broadcast')
    @common_options
    @click.argument('channels', nargs=-1, required=True)
    @click.option('--data', '-d', required=True, help='Data to send (JSON or plain string)')
    @click.option('--client', '-c', help='Client connection ID the publication comes from')
    @pass_context
    @require_config
    def broadcast(
        ctx: CentContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        channels: Tuple[str, ...],
        data: str,
        client: Optional[str]
    ):
        """
        Publish the same data into several CHANNELS.

        \b
        Examples:
          cent broadcast news alerts --data '{"text": "maintenance at 10:00"}'
        """
        setup_logging(verbose, quiet)
        payload = parse_json_value(data)

        if client:
            _run(ctx, lambda c: c.broadcast_client(list(channels), payload, client))
        else:
            _run(ctx, lambda c: c.broadcast(list(channels), payload))

        _report_ok(
            OutputFormat(output_format), quiet,
            f"Broadcast to {len(channels)} channel(s)."
        )

    @cli.command('unsubscribe')
    @common_options
    @click.argument('channel')
    @click.argument('user')
    @pass_context
    @require_config
    def unsubscribe(
        ctx: CentContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        channel: str,
        user: str
    ):
        """Unsubscribe USER from CHANNEL."""
        setup_logging(verbose, quiet)
        _run(ctx, lambda c: c.unsubscribe(channel, user))
        _report_ok(OutputFormat(output_format), quiet, f"Unsubscribed {user} from {channel}.")

    @cli.command('disconnect')
    @common_options
    @click.argument('user')
    @pass_context
    @require_config
    def disconnect(
        ctx: CentContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        user: str
    ):
        """Disconnect all connections of USER."""
        setup_logging(verbose, quiet)
        _run(ctx, lambda c: c.disconnect(user))
        _report_ok(OutputFormat(output_format), quiet, f"Disconnected {user}.")

    @cli.command('presence')
    @common_options
    @click.argument('channel')
    @pass_context
    @require_config
    def presence(
        ctx: CentContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        channel: str
    ):
        """Show clients subscribed to CHANNEL."""
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        clients = _run(ctx, lambda c: c.presence(channel))

        if fmt == OutputFormat.JSON:
            print_json({client_id: asdict(info) for client_id, info in clients.items()})
            return

        if not quiet:
            click.echo(f"\nPresence in {channel} ({len(clients)} clients):\n")
        print_table(
            ["Client", "User", "Default Info"],
            [
                [client_id, info.user or '-', truncate_string(str(info.default_info or '-'))]
                for client_id, info in sorted(clients.items())
            ]
        )

    @cli.command('history')
    @common_options
    @click.argument('channel')
    @pass_context
    @require_config
    def history(
        ctx: CentContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        channel: str
    ):
        """Show messages kept in CHANNEL history."""
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        messages = _run(ctx, lambda c: c.history(channel))

        if fmt == OutputFormat.JSON:
            print_json([asdict(m) for m in messages])
            return

        if not quiet:
            click.echo(f"\nHistory of {channel} ({len(messages)} messages):\n")
        print_table(
            ["UID", "Client", "Data"],
            [
                [m.uid, m.client or '-', truncate_string(str(m.data))]
                for m in messages
            ]
        )

    @cli.command('channels')
    @common_options
    @pass_context
    @require_config
    def channels(
        ctx: CentContext,
        verbose: bool,
        quiet: bool,
        output_format: str
    ):
        """List active channels (with one or more subscribers)."""
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        names = _run(ctx, lambda c: c.channels())

        if fmt == OutputFormat.JSON:
            print_json(names)
            return

        if not names:
            print_info("No active channels.")
            return
        for name in names:
            click.echo(name)

    @cli.command('stats')
    @common_options
    @pass_context
    @require_config
    def stats(
        ctx: CentContext,
        verbose: bool,
        quiet: bool,
        output_format: str
    ):
        """Show server node stats."""
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        result = _run(ctx, lambda c: c.stats())

        if fmt == OutputFormat.JSON:
            print_json(asdict(result))
            return

        if not quiet:
            click.echo(f"\nNodes: {len(result.nodes)}, metrics interval: {result.metrics_interval}s\n")
        print_table(
            ["Name", "UID", "Clients", "Channels"],
            [
                [
                    node.name or '-',
                    node.uid,
                    node.metrics.get('num_clients', '-'),
                    node.metrics.get('num_channels', '-'),
                ]
                for node in result.nodes
            ]
        )

    @cli.command('batch')
    @common_options
    @click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @pass_context
    @require_config
    def batch(
        ctx: CentContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        file: Path
    ):
        """
        Send all commands from a JSON FILE in one request.

        FILE holds an array of {"method": ..., "params": {...}} objects.

        \b
        Example file:
          [
            {"method": "publish", "params": {"channel": "news", "data": {"n": 1}}},
            {"method": "presence", "params": {"channel": "news"}}
          ]
        """
        setup_logging(verbose, quiet)
        fmt = OutputFormat(output_format)

        try:
            items = load_json_file(file)
            if not isinstance(items, list):
                raise ValueError("Batch file must contain a JSON array")
            requests = [request_from_dict(item) for item in items]
        except (ValueError, AttributeError) as e:
            print_error(f"Invalid batch file: {e}")
            sys.exit(1)

        def send_all(client: CentClient) -> List[Any]:
            sent = [client.add(request) for request in requests]
            return list(zip(sent, client.send()))

        pairs = _run(ctx, send_all)
        failed = sum(1 for _, result in pairs if result.error)

        if fmt == OutputFormat.JSON:
            print_json([
                {
                    "uid": command.uid,
                    "method": command.method,
                    "error": result.error,
                    "body": result.body,
                }
                for command, result in pairs
            ])
        else:
            print_table(
                ["#", "Method", "Status"],
                [
                    [i, command.method, result.error or 'ok']
                    for i, (command, result) in enumerate(pairs, 1)
                ]
            )
            if not quiet:
                click.echo(f"\nSent {len(pairs)} commands, {failed} failed.")

        if failed:
            sys.exit(1)
