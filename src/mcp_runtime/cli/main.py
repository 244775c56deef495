"""Main CLI entry point for the MCP runtime.

stdout belongs to the protocol while serving, so everything the CLI reports
during ``serve`` goes to stderr.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from dotenv import load_dotenv
from tabulate import tabulate

from .. import __version__
from ..config import ServerConfig, load_server_config
from ..demo import register_demo_capabilities
from ..protocol.errors import DuplicateCapability
from ..server.registry import CapabilityRegistry
from ..server.runtime import EXIT_STARTUP_ERROR, run_stdio
from ..utils import setup_logging

LOG_LEVEL_CHOICES = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _load_config(config_path: Optional[Path]) -> ServerConfig:
    """Load the server configuration, exiting with the startup code on failure."""
    try:
        return load_server_config(config_path)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(EXIT_STARTUP_ERROR)


def _build_registry(config: ServerConfig) -> CapabilityRegistry:
    try:
        return register_demo_capabilities(config=config)
    except DuplicateCapability as e:
        click.echo(f"Capability registration failed: {e.message}", err=True)
        sys.exit(EXIT_STARTUP_ERROR)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """MCP Runtime CLI.

    Serves the demo tools, resources, and prompts over stdio using the
    Model Context Protocol.
    """
    load_dotenv()


@main.command()
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Configuration file (YAML or JSON)")
@click.option("--concurrent", is_flag=True, help="Handle requests concurrently")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
    help="Process log level (overrides the configuration)",
)
def serve(config_path: Optional[Path], concurrent: bool, log_level: Optional[str]) -> None:
    """Serve the demo capabilities over stdin/stdout.

    Exits 0 when the client closes the stream, 1 on a framing error, and 2
    if startup fails.
    """
    config = _load_config(config_path)

    overrides = {}
    if concurrent:
        overrides["concurrent"] = True
    if log_level:
        overrides["log_level"] = log_level.upper()
    if overrides:
        config = config.model_copy(update=overrides)

    setup_logging(level=config.log_level, format_type=config.log_format, log_file=config.log_file)
    registry = _build_registry(config)

    sys.exit(run_stdio(registry, config))


@main.command()
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Configuration file (YAML or JSON)")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table", help="Output format")
def capabilities(config_path: Optional[Path], output_format: str) -> None:
    """List the capabilities the server would register."""
    config = _load_config(config_path)
    registry = _build_registry(config)
    descriptors = registry.list_descriptors()

    if output_format == "json":
        click.echo(json.dumps([d.to_listing() for d in descriptors], indent=2))
        return

    rows = []
    for d in descriptors:
        params = ", ".join(p.name if p.required else f"[{p.name}]" for p in d.params) or "-"
        description = d.description[:50] + "..." if len(d.description) > 50 else d.description
        rows.append([d.kind.value, d.name, params, description])

    click.echo(tabulate(rows, headers=["Kind", "Name", "Params", "Description"], tablefmt="grid"))
    click.echo(f"\n{len(descriptors)} capabilities")


if __name__ == "__main__":
    main()
