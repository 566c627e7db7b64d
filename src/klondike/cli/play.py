"""CLI command for playing Klondike in the terminal."""

from __future__ import annotations

import logging
import sys

import click

from klondike.engine.config import ConfigError
from klondike.play.session import PlaySession, SessionConfig

logger = logging.getLogger(__name__)


@click.command()
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option(
    "--max-recycles",
    type=int,
    default=None,
    help="Times the waste may be turned back into stock (default: KLONDIKE_MAX_STOCK_RECYCLES or 5)",
)
@click.option(
    "--history-limit",
    type=int,
    default=None,
    help="Maximum undo depth (unbounded if omitted)",
)
@click.option("--autoplay/--interactive", default=False, help="Let a computer player play the game")
@click.option(
    "--player",
    type=click.Choice(["random", "greedy"]),
    default="greedy",
    show_default=True,
    help="Computer player used with --autoplay",
)
@click.option("--max-moves", type=int, default=2000, show_default=True, help="Autoplay move cap")
@click.option("--json", "as_json", is_flag=True, help="Print the final board as JSON")
@click.option("--no-activity", is_flag=True, help="Hide the recent-activity log")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    seed: int | None,
    max_recycles: int | None,
    history_limit: int | None,
    autoplay: bool,
    player: str,
    max_moves: int,
    as_json: bool,
    no_activity: bool,
    verbose: bool,
):
    """Play three-draw Klondike solitaire."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING, format="%(message)s")

    config = SessionConfig(
        seed=seed,
        autoplay=autoplay,
        player=player,
        max_moves=max_moves,
        max_stock_recycles=max_recycles,
        history_limit=history_limit,
        show_activity=not no_activity,
    )

    try:
        session = PlaySession(config)
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    try:
        result = session.run(output_fn=click.echo)
    except KeyboardInterrupt:
        click.echo("\n\nGame interrupted.")
        sys.exit(130)

    if as_json:
        click.echo(session.engine.view().model_dump_json(indent=2))

    logger.info(f"Session finished: {result.status} with score {result.score}")
    click.echo(f"\nFinal score: {result.score} ({result.status.replace('_', ' ')})")


if __name__ == "__main__":
    main()
