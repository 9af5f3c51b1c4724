"""
Utility functions for the cent CLI.
"""

import json
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

import click


class OutputFormat(str, Enum):
    """Output format for command results."""
    TABLE = "table"
    JSON = "json"


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging based on verbosity flags."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )

    # urllib3 is chatty at DEBUG
    if not verbose:
        logging.getLogger("urllib3").setLevel(logging.WARNING)


def print_success(message: str) -> None:
    click.echo(click.style("✓ ", fg="green") + message)


def print_error(message: str, details: Optional[str] = None) -> None:
    """Print an error message, with optional details, to stderr."""
    click.echo(click.style("✗ Error: ", fg="red", bold=True) + message, err=True)
    if details:
        click.echo(click.style("  Details: ", fg="red") + str(details), err=True)


def print_warning(message: str) -> None:
    click.echo(click.style("⚠ ", fg="yellow") + message)


def print_info(message: str) -> None:
    click.echo(click.style("ℹ ", fg="blue") + message)


def print_json(data: Any, indent: int = 2) -> None:
    """Print data as formatted JSON."""
    click.echo(json.dumps(data, indent=indent, default=str, ensure_ascii=False))


def print_table(headers: List[str], rows: List[List[Any]]) -> None:
    """Print a simple aligned table."""
    cells = [[str(c) for c in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, cell in enumerate(row):
            if i < len(widths):
                widths[i] = max(widths[i], len(cell))

    header_line = "  ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    click.echo(click.style(header_line, bold=True))
    click.echo("  ".join("-" * w for w in widths))
    for row in cells:
        click.echo("  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)))


def parse_json_value(value: str) -> Any:
    """
    Parse a command line value as JSON.

    Text that is not valid JSON is taken as a plain string, so
    ``cent publish news hello`` publishes ``"hello"``.
    """
    try:
        return json.loads(value)
    except ValueError:
        return value


def load_json_file(path: Path) -> Any:
    """
    Load a JSON file.

    Raises:
        ValueError: If the file can't be read or isn't valid JSON
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"Cannot read file {path}: {e}")

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}")


def truncate_string(text: str, max_length: int = 60) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."
