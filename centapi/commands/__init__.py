"""
CLI command modules for cent.

Each module exposes a ``register_*_commands(cli)`` function that adds its
commands to the main group. Shared context and decorators live here.
"""

import sys
from functools import update_wrapper

import click

from ..config import ConfigManager
from ..utils import (
    OutputFormat,
    print_error,
    print_info,
    print_json,
    print_success,
    print_table,
    print_warning,
)


class CentContext:
    """CLI context object for sharing state between commands."""

    def __init__(self):
        self.config_manager: ConfigManager = None  # type: ignore[assignment]


pass_context = click.make_pass_decorator(CentContext, ensure=True)


def common_options(f):
    """Common options for all commands."""
    f = click.option(
        '-v', '--verbose',
        is_flag=True,
        help='Enable verbose output'
    )(f)
    f = click.option(
        '-q', '--quiet',
        is_flag=True,
        help='Suppress non-essential output'
    )(f)
    f = click.option(
        '-f', '--format',
        'output_format',
        type=click.Choice([fmt.value for fmt in OutputFormat]),
        default=OutputFormat.TABLE.value,
        help='Output format'
    )(f)
    return f


def require_config(f):
    """Decorator to require a usable server configuration."""
    @click.pass_context
    def wrapper(click_ctx, *args, **kwargs):
        ctx = click_ctx.ensure_object(CentContext)
        config = ctx.config_manager.get()

        if not config.is_configured():
            print_error(
                "cent is not configured.",
                "Run 'cent configure --server URL --secret SECRET' "
                "(or --insecure for an unsigned API endpoint)."
            )
            sys.exit(1)

        return click_ctx.invoke(f, *args, **kwargs)

    return update_wrapper(wrapper, f)


__all__ = [
    "CentContext",
    "pass_context",
    "common_options",
    "require_config",
    "OutputFormat",
    "print_error",
    "print_info",
    "print_json",
    "print_success",
    "print_table",
    "print_warning",
]
