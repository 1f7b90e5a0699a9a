import asyncio
import json
import sys

import typer
from loguru import logger

from steamwatch.app_ctx import AppCtx
from steamwatch.apis.secrets import (
    MissingCredentialsError,
    get_steam_secrets,
    save_steam_secrets,
    verify_credentials,
)
from steamwatch.dispatcher import SteamAPIError, execute
from steamwatch.models import Action
from steamwatch.settings import settings
from steamwatch.trigger import poll_forever


app = typer.Typer()


@app.callback()
def configure(debug: bool = typer.Option(settings.DEBUG, help="Verbose logging")):
    logger.remove()
    # Resolve sys.stderr per message, it is swapped under test runners
    logger.add(
        lambda message: sys.stderr.write(message),
        level="DEBUG" if debug else "INFO",
    )


def echo_records(records: list[dict]) -> None:
    for record in records:
        typer.echo(json.dumps(record, indent=2, ensure_ascii=False))


def build_ctx(steam_id: str | None, action: str | None) -> AppCtx:
    try:
        ctx = AppCtx.from_settings(steam_id=steam_id, action=action)
    except MissingCredentialsError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)

    if not ctx.get_parameter("steamId"):
        typer.echo("No Steam ID given, pass one or set STEAMWATCH_STEAM_ID", err=True)
        raise typer.Exit(1)
    return ctx


def run_action(steam_id: str | None, action: str | None) -> None:
    ctx = build_ctx(steam_id, action)
    try:
        records = asyncio.run(execute(ctx))
    except SteamAPIError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    echo_records(records)


@app.command()
def actions():
    for action in Action:
        typer.echo(f"{action.value} - {action.label}: {action.description}")


@app.command()
def login(api_key: str):
    save_steam_secrets(api_key)
    typer.echo("Steam API key saved")


@app.command()
def check_key():
    try:
        credentials = get_steam_secrets()
    except MissingCredentialsError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)

    if not asyncio.run(verify_credentials(credentials)):
        typer.echo("Steam API key was rejected", err=True)
        raise typer.Exit(1)
    typer.echo("Steam API key is valid")


@app.command()
def run(steam_id: str = typer.Option(None), action: str = typer.Option(None)):
    run_action(steam_id, action)


@app.command()
def user_stats(steam_id: str = typer.Argument(None)):
    run_action(steam_id, Action.USER_STATS.value)


@app.command()
def friend_list(steam_id: str = typer.Argument(None)):
    run_action(steam_id, Action.FRIEND_LIST.value)


@app.command()
def recent_games(steam_id: str = typer.Argument(None)):
    run_action(steam_id, Action.RECENT_GAMES.value)


@app.command()
def poll(
    steam_id: str = typer.Option(None),
    action: str = typer.Option(None),
    interval: int = typer.Option(settings.POLL_INTERVAL, help="Seconds between polls"),
    count: int = typer.Option(None, help="Stop after this many polls"),
):
    ctx = build_ctx(steam_id, action)
    try:
        asyncio.run(poll_forever(ctx, interval, echo_records, limit=count))
    except SteamAPIError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
