"""Highlight reel CLI using Typer."""

import asyncio
import json
from typing import Any

import typer
from typing_extensions import Annotated

from .config import get_settings
from .errors import UpstreamError
from .nba_logging import configure_logging

app = typer.Typer(help="Full-game and clutch-time NBA highlight aggregation")


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))


@app.callback()
def _setup() -> None:
    configure_logging(get_settings())


@app.command()
def games() -> None:
    """List the tracked team's completed games, newest first."""
    try:
        result = asyncio.run(_list_games())
    except UpstreamError as e:
        typer.echo(f"Failed to fetch games: {e}", err=True)
        raise typer.Exit(1)

    _echo_json({"games": [game.model_dump(by_alias=True) for game in result]})


async def _list_games():
    from .http import build_client
    from .io_clients import NBACdnClient

    settings = get_settings()
    async with build_client(settings) as client:
        cdn = NBACdnClient(client, settings=settings)
        return await cdn.fetch_team_games(settings.TEAM_ID, settings.TEAM_TRICODE)


@app.command()
def highlights(
    game_id: Annotated[str, typer.Argument(help="NBA game ID (e.g. 0022500123)")],
    report: Annotated[bool, typer.Option("--report", help="Include aggregation counts and timings")] = False,
) -> None:
    """Aggregate full-game and clutch-time highlights for a game."""
    result = asyncio.run(_run_highlights(game_id))

    output = {"events": [event.model_dump(mode="json", by_alias=True) for event in result.events]}
    if report:
        output["report"] = result.report.as_dict()
    _echo_json(output)


async def _run_highlights(game_id: str):
    from .pipelines import open_aggregator

    async with open_aggregator(get_settings()) as aggregator:
        return await aggregator.run(game_id)


@app.command()
def clutch(
    game_id: Annotated[str, typer.Argument(help="NBA game ID (e.g. 0022500123)")],
) -> None:
    """Show the clutch window action numbers and participants for a game."""
    context = asyncio.run(_clutch_context(game_id))
    _echo_json({
        "gameId": game_id,
        "clutchEventIds": sorted(context.clutch_event_ids),
        "participantIds": list(context.participant_ids),
    })


async def _clutch_context(game_id: str):
    from .http import build_client
    from .io_clients import NBACdnClient

    settings = get_settings()
    async with build_client(settings) as client:
        cdn = NBACdnClient(client, settings=settings)
        return await cdn.fetch_clutch_context(
            game_id,
            settings.PLAYER_ID,
            final_period=settings.CLUTCH_PERIOD,
            threshold_minutes=settings.CLUTCH_MINUTES,
        )


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    app()
