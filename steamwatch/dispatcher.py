from loguru import logger

from steamwatch.apis.steam import SteamAPI
from steamwatch.app_ctx import AppCtx
from steamwatch.models import Action, ActionRequest, Record
from steamwatch.normalizer import (
    normalize_friend_list,
    normalize_recent_games,
    normalize_user_stats,
)


class SteamAPIError(Exception):
    pass


class UnknownActionError(ValueError):
    pass


def parse_request(ctx: AppCtx) -> ActionRequest:
    action = ctx.get_parameter("action")
    try:
        parsed = Action(action)
    except ValueError:
        raise UnknownActionError(f"Unknown action: {action}") from None
    return ActionRequest(steam_id=ctx.get_parameter("steamId", ""), action=parsed)


async def user_stats(api: SteamAPI, steam_id: str) -> Record:
    summaries = await api.get_player_summaries(steam_id)
    owned_games = await api.get_owned_games(steam_id)
    return normalize_user_stats(steam_id, summaries, owned_games)


async def friend_list(api: SteamAPI, steam_id: str) -> Record:
    return normalize_friend_list(await api.get_friend_list(steam_id))


async def recent_games(api: SteamAPI, steam_id: str) -> Record:
    return normalize_recent_games(await api.get_recently_played_games(steam_id))


HANDLERS = {
    Action.USER_STATS: user_stats,
    Action.FRIEND_LIST: friend_list,
    Action.RECENT_GAMES: recent_games,
}


async def dispatch(ctx: AppCtx) -> dict:
    """Run the requested action and return its output record.

    Every call hits Steam again, nothing is memoized.

    Raises:
        UnknownActionError: the `action` parameter is not a known action.
    """
    request = parse_request(ctx)
    api_key = ctx.get_credentials().api_key.get_secret_value()
    api = SteamAPI(api_key, transport=ctx.transport)

    logger.info("Running {} for Steam ID {}", request.action.value, request.steam_id)
    result = await HANDLERS[request.action](api, request.steam_id)
    return result.to_record()


def _redact(message: str, ctx: AppCtx) -> str:
    api_key = ctx.get_credentials().api_key.get_secret_value()
    if api_key:
        message = message.replace(api_key, "***")
    return message


async def execute(ctx: AppCtx) -> list[dict]:
    """Manual execution: one output record, or a single SteamAPIError."""
    try:
        record = await dispatch(ctx)
    except Exception as e:
        message = _redact(str(e), ctx)
        logger.error("Steam action failed: {}", message)
        raise SteamAPIError(f"Steam API Error: {message}") from e

    return [record]
