"""penum constant command - show the constant identifier for member names."""

import click

from persistent_enum.enum.names import constant_identifier


@click.command()
@click.argument("names", nargs=-1, required=True)
def constant_command(names: tuple[str, ...]) -> None:
    """Print the constant identifier each NAME is exposed under."""
    for name in names:
        try:
            click.echo(f"{name}\t{constant_identifier(name)}")
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="NAMES") from e
