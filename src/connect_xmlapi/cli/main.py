"""Main CLI entry point for the Connect XML API client.

This module provides the main Click command group for the connect-xmlapi CLI.
"""

from pathlib import Path
from typing import Optional

import click

from connect_xmlapi import __version__
from connect_xmlapi.cli.api_commands import meetings_group, sco_group, whoami
from connect_xmlapi.config import load_config
from connect_xmlapi.logging_audit import configure_logging
from connect_xmlapi.utils.exceptions import ConfigurationError


@click.group()
@click.version_option(version=__version__, prog_name="connect-xmlapi")
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: ./config/config.json)",
)
@click.option("--verbose", is_flag=True, help="Enable verbose logging (DEBUG level)")
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to log file (overrides config file)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
) -> None:
    """Connect XML API client - query and manage meetings, principals and reports.

    Common usage:

        # Check configuration
        connect-xmlapi config validate config/config.json

        # Log in and show the current user
        connect-xmlapi whoami

        # List meetings whose name contains "sync"
        connect-xmlapi meetings list --like sync

    Use --help with any command for more information.
    """
    ctx.ensure_object(dict)

    # Commands that need the service load it through get_config(); a broken
    # configuration must not prevent `config validate` or `version`.
    config_obj = None
    try:
        config_obj = load_config(config)
        ctx.obj["config"] = config_obj
    except ConfigurationError as e:
        ctx.obj["config_error"] = e

    ctx.obj["verbose"] = verbose
    ctx.obj["log_file"] = log_file

    # Configure logging with precedence: CLI flags > config file > defaults
    if config_obj is not None:
        log_level = "DEBUG" if verbose else config_obj.logging.level
        log_file_path = log_file if log_file else config_obj.logging.log_file
        redact = config_obj.logging.redact_credentials
    else:
        log_level = "DEBUG" if verbose else "WARNING"
        log_file_path = log_file
        redact = True

    configure_logging(level=log_level, log_file=log_file_path, redact_credentials=redact)


cli.add_command(whoami)
cli.add_command(meetings_group)
cli.add_command(sco_group)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command()
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file.

    Example:
        connect-xmlapi config validate config/config.json
    """
    try:
        config_obj = load_config(config_file)

        click.echo(click.style("✓", fg="green", bold=True) + " Configuration is valid")
        click.echo(f"\nConfiguration file: {config_file}")
        click.echo("\nService:")
        click.echo(f"  Endpoint:    {config_obj.service.url}")
        click.echo(f"  Session via: {'parameter' if config_obj.session.use_session_param else 'cookie'}")

        click.echo("\nCredentials:")
        click.echo(f"  User:        {config_obj.credentials.login or 'Not configured'}")
        click.echo(f"  Password:    {'set' if config_obj.credentials.password else 'Not configured'}")

        click.echo("\nProxy:")
        click.echo(f"  URL:         {config_obj.proxy.url or 'Not configured'}")

        click.echo("\nTransport:")
        click.echo(f"  Verify TLS:  {config_obj.transport.verify_tls}")
        click.echo(
            f"  Timeouts:    {config_obj.transport.timeout_connect}s connect, "
            f"{config_obj.transport.timeout_read}s read"
        )

        click.echo("\nLogging:")
        click.echo(f"  Level:       {config_obj.logging.level}")
        click.echo(f"  Log file:    {config_obj.logging.log_file}")
        click.echo(f"  Redact:      {config_obj.logging.redact_credentials}")

    except ConfigurationError as e:
        click.echo(click.style("✗", fg="red", bold=True) + " Configuration validation failed")
        click.echo(f"\n{e}", err=True)
        raise click.exceptions.Exit(1)


cli.add_command(config)


@cli.command()
def version() -> None:
    """Display version information."""
    click.echo(f"connect-xmlapi version {__version__}")


if __name__ == "__main__":
    cli()
