"""
Configuration/settings commands for cent.

Commands:
- configure: Configure server connection settings
- config-clear: Clear all configuration
"""

from typing import Optional

import click

from . import (
    CentContext,
    pass_context,
    print_success,
    print_info,
)
from ..config import DEFAULT_SERVER_URL


def register_settings_commands(cli: click.Group) -> None:
    """Register configuration commands with the CLI."""

    @cli.command('configure')
    @click.option(
        '--server', '-s',
        help=f'Server URL (default: {DEFAULT_SERVER_URL})'
    )
    @click.option(
        '--secret',
        help='Project secret used to sign API requests'
    )
    @click.option(
        '--timeout', '-t',
        type=float,
        help='Request timeout in seconds'
    )
    @click.option(
        '--insecure/--secure',
        default=None,
        help='Send unsigned requests (API endpoint protected by the network)'
    )
    @click.option(
        '--no-verify-ssl',
        is_flag=True,
        help='Disable SSL certificate verification'
    )
    @click.option(
        '--show',
        is_flag=True,
        help='Show current configuration'
    )
    @pass_context
    def configure(
        ctx: CentContext,
        server: Optional[str],
        secret: Optional[str],
        timeout: Optional[float],
        insecure: Optional[bool],
        no_verify_ssl: bool,
        show: bool
    ):
        """
        Configure cent settings.

        \b
        Examples:
          cent configure --server http://localhost:8000 --secret SECRET
          cent configure --insecure
          cent configure --show
        """
        config_manager = ctx.config_manager

        if show:
            config = config_manager.get()
            click.echo("\nCurrent Configuration:")
            click.echo(f"  Server URL:      {config.server_url}")
            click.echo(f"  Secret:          {'*' * 10 + '...' if config.secret else '(not configured)'}")
            click.echo(f"  Timeout:         {config.timeout}s")
            click.echo(f"  Insecure:        {config.insecure}")
            click.echo(f"  Verify SSL:      {config.verify_ssl}")
            click.echo(f"  Config Path:     {config_manager.get_config_path()}")
            return

        # Interactive configuration if no options provided
        if not any([server, secret, timeout, insecure is not None, no_verify_ssl]):
            click.echo("Interactive configuration setup:")

            current = config_manager.get()

            server = click.prompt(
                "Server URL",
                default=current.server_url or DEFAULT_SERVER_URL
            )

            insecure = click.confirm(
                "Send unsigned requests (insecure mode)?",
                default=current.insecure
            )

            if not insecure:
                secret = click.prompt(
                    "Project secret",
                    default=current.secret or '',
                    hide_input=True,
                    show_default=False
                )

            timeout = click.prompt(
                "Request timeout (seconds)",
                default=current.timeout,
                type=float
            )

        updates = {}
        if server:
            updates['server_url'] = server
        if secret:
            updates['secret'] = secret
        if timeout:
            updates['timeout'] = timeout
        if insecure is not None:
            updates['insecure'] = insecure
        if no_verify_ssl:
            updates['verify_ssl'] = False

        if updates:
            config_manager.update(**updates)
            print_success("Configuration saved successfully.")
        else:
            print_info("No changes made.")

    @cli.command('config-clear')
    @click.confirmation_option(prompt='Are you sure you want to clear all configuration?')
    @pass_context
    def config_clear(ctx: CentContext):
        """Clear all stored configuration."""
        ctx.config_manager.clear()
        print_success("Configuration cleared.")
