"""
cent - Command Line Interface for the Centrifugo HTTP API.

This module provides the main CLI entry point. Commands live in
``centapi.commands``:
- Configuration management
- Publishing and connection management
- Presence, history, channels and stats queries
- Batched commands from a JSON file
- Connection tokens and private channel signatures
"""

import sys
import logging
from pathlib import Path
from typing import Optional

import click

from . import __version__, __prog_name__
from .config import get_config_manager
from .commands import CentContext
from .commands.messaging import register_messaging_commands
from .commands.settings import register_settings_commands
from .commands.tokens import register_token_commands
from .utils import print_error

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name=__prog_name__)
@click.option(
    '--config-dir',
    type=click.Path(path_type=Path),
    envvar='CENT_CONFIG_DIR',
    help='Custom configuration directory'
)
@click.pass_context
def cli(ctx, config_dir: Optional[Path]):
    """
    cent - Centrifugo HTTP API client.

    Publish messages and manage a real-time messaging server from the
    command line.

    \b
    Quick Start:
      1. Configure server:  cent configure --server http://localhost:8000 --secret SECRET
      2. Publish:           cent publish '$public:chat' '{"input": "hello"}'
      3. Who is there:      cent presence '$public:chat'
      4. Many at once:      cent batch commands.json

    \b
    Environment Variables:
      CENT_SERVER_URL   - Server URL (default: http://localhost:8000)
      CENT_SECRET       - Project secret
      CENT_TIMEOUT      - Request timeout in seconds
      CENT_INSECURE     - Skip request signing
      CENT_CONFIG_DIR   - Custom configuration directory
    """
    ctx.ensure_object(CentContext)
    ctx.obj.config_manager = get_config_manager(config_dir)


register_settings_commands(cli)
register_messaging_commands(cli)
register_token_commands(cli)


# ============================================================================
# Entry Point
# ============================================================================

def main():
    """Main entry point for the CLI."""
    try:
        cli(auto_envvar_prefix='CENT')
    except KeyboardInterrupt:
        click.echo("\nAborted.")
        sys.exit(130)
    except Exception as e:
        logger.exception("Unexpected error")
        print_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
