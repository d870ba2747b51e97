"""Command-line replay of a scoreboard command stream."""

import logging
from typing import IO, Iterable, Iterator

import click
from pydantic import ValidationError

from .commands import parse_command_line
from .config import ContestSettings
from .contest import Contest, apply_command
from .errors import CommandParseError
from .render import render_outcome

logger = logging.getLogger(__name__)


def replay(lines: Iterable[str], contest: Contest) -> Iterator[str]:
    """Apply every command line in order and yield rendered output lines.

    Stops after a successful END.
    """
    for lineno, line in enumerate(lines, start=1):
        try:
            cmd = parse_command_line(line)
        except CommandParseError as exc:
            logger.warning(f"line {lineno}: skipped ({exc})")
            continue
        if cmd is None:
            continue
        outcome = apply_command(contest, cmd)
        yield from render_outcome(outcome)
        if outcome.ok and outcome.type == "END":
            break


@click.command()
@click.argument("input_file", type=click.File("r"), default="-")
@click.option("--accepted-verdict", default="Accepted", show_default=True,
              help="Verdict that counts as a solve.")
@click.option("--penalty", "wrong_attempt_penalty", default=20, show_default=True, type=int,
              help="Penalty minutes per wrong attempt.")
@click.option("--log-level", default="WARNING", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
@click.version_option(version="1.0.0")
def cli(input_file: IO[str], accepted_verdict: str, wrong_attempt_penalty: int, log_level: str):
    """icpc-scoreboard - replay ICPC scoreboard commands from INPUT_FILE (default stdin)."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = ContestSettings(
            accepted_verdict=accepted_verdict, wrong_attempt_penalty=wrong_attempt_penalty
        )
    except ValidationError as exc:
        raise click.BadParameter(str(exc))

    contest = Contest(settings)
    for out in replay(input_file, contest):
        click.echo(out)


if __name__ == "__main__":
    cli()
