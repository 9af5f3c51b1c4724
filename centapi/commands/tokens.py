"""
Credential commands for cent.

These only need the project secret, no server connection:
- token: Connection token for a user
- channel-sign: Private channel subscription signature
"""

import sys
import time
from typing import Optional

import click

from ..sign import generate_channel_sign, generate_client_token
from ..utils import OutputFormat, setup_logging
from . import CentContext, common_options, pass_context, print_error, print_json


def _secret(ctx: CentContext) -> str:
    secret = ctx.config_manager.get().secret
    if not secret:
        print_error(
            "No project secret configured.",
            "Run 'cent configure --secret SECRET' or set CENT_SECRET."
        )
        sys.exit(1)
    return secret


def register_token_commands(cli: click.Group) -> None:
    """Register credential commands with the CLI."""

    @cli.command('token')
    @common_options
    @click.argument('user')
    @click.option('--timestamp', '-t', help='Unix timestamp (default: now)')
    @click.option('--info', '-i', default='', help='Connection info JSON string')
    @pass_context
    def token(
        ctx: CentContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        user: str,
        timestamp: Optional[str],
        info: str
    ):
        """
        Generate a connection token for USER.

        \b
        Examples:
          cent token 42
          cent token 42 --info '{"name": "Alice"}' --format json
        """
        setup_logging(verbose, quiet)
        secret = _secret(ctx)
        timestamp = timestamp or str(int(time.time()))

        value = generate_client_token(secret, user, timestamp, info)

        if OutputFormat(output_format) == OutputFormat.JSON:
            print_json({"user": user, "timestamp": timestamp, "info": info, "token": value})
        elif quiet:
            click.echo(value)
        else:
            click.echo(f"User:      {user}")
            click.echo(f"Timestamp: {timestamp}")
            click.echo(f"Token:     {value}")

    @cli.command('channel-sign')
    @common_options
    @click.argument('client')
    @click.argument('channel')
    @click.option('--channel-data', '-d', default='', help='Channel info JSON string')
    @pass_context
    def channel_sign(
        ctx: CentContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        client: str,
        channel: str,
        channel_data: str
    ):
        """Sign a subscription of CLIENT to private CHANNEL."""
        setup_logging(verbose, quiet)
        secret = _secret(ctx)

        value = generate_channel_sign(secret, client, channel, channel_data)

        if OutputFormat(output_format) == OutputFormat.JSON:
            print_json({
                "client": client,
                "channel": channel,
                "channel_data": channel_data,
                "sign": value,
            })
        else:
            click.echo(value)
