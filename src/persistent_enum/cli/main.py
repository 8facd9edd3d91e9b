"""persistent-enum CLI - penum command."""

from pathlib import Path

import click

from persistent_enum.cli.constant import constant_command
from persistent_enum.cli.show import show_command
from persistent_enum.config.loader import load_config
from persistent_enum.core.errors import ConfigError
from persistent_enum.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="penum")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """persistent-enum - inspect database-backed enumerations."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(e.message) from e
    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config


cli.add_command(show_command, name="show")
cli.add_command(constant_command, name="constant")


if __name__ == "__main__":
    cli()
