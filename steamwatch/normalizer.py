"""Reshape raw Steam Web API payloads into flat output records."""

from loguru import logger

from steamwatch.models import (
    FriendEntry,
    FriendListPayload,
    FriendListResult,
    GameDetails,
    OwnedGames,
    Player,
    PlayerSummaries,
    RecentGameEntry,
    RecentGamesResult,
    RecentlyPlayedGames,
    TopGame,
    UserStats,
)
from steamwatch.utils import (
    format_playtime,
    iso_from_unix,
    persona_state_to_text,
    utc_now_iso,
)


TOP_GAMES_LIMIT = 5
RECENT_GAMES_LIMIT = 10

NO_FRIENDS = "No friends found or profile is private"
FRIENDS_UNAUTHORIZED = (
    "Friend list is private or API key doesn't have access. "
    "Note: Friend list requires the API key to be linked to the Steam ID being queried."
)
FRIENDS_NOTE = (
    "Friend list requires API key to be linked to the Steam ID being queried "
    "due to privacy restrictions"
)

NO_RECENT_GAMES = "No recent games found or profile is private"
RECENT_GAMES_UNAUTHORIZED = (
    "Recent games are private or API key doesn't have access. "
    "Note: Recent games requires the API key to be linked to the Steam ID being queried."
)
RECENT_GAMES_NOTE = (
    "Recent games requires API key to be linked to the Steam ID being queried "
    "due to privacy restrictions"
)


class PlayerNotFoundError(LookupError):
    pass


def top_games(owned: OwnedGames, limit: int = TOP_GAMES_LIMIT) -> list[TopGame]:
    """Owned games with the most all-time playtime, descending.

    Ties keep the upstream order.
    """
    games = owned.response.games or []
    ranked = sorted(games, key=lambda game: game.playtime_forever, reverse=True)
    return [
        TopGame(name=game.name, playtime=format_playtime(game.playtime_forever))
        for game in ranked[:limit]
    ]


def game_details(player: Player) -> GameDetails | None:
    if not player.gameextrainfo:
        return None
    return GameDetails(
        game_name=player.gameextrainfo,
        game_id=player.gameid,
        server_ip=player.gameserverip,
        # Rich presence strings look like "Game: Map"
        rich_presence=player.gameextrainfo if ":" in player.gameextrainfo else None,
    )


def normalize_user_stats(
    steam_id: str, summaries: dict, owned_games: dict
) -> UserStats:
    players = PlayerSummaries.model_validate(summaries).response.players
    if not players:
        raise PlayerNotFoundError(f"No player found for Steam ID {steam_id}")
    # Only one Steam ID is ever queried
    player = players[0]
    owned = OwnedGames.model_validate(owned_games)

    return UserStats(
        personaname=player.personaname,
        steamid=player.steamid,
        profileurl=player.profileurl,
        avatar=player.avatarfull,
        personastate=player.personastate,
        status=persona_state_to_text(player.personastate),
        playing_game=player.gameextrainfo or "Not playing game",
        game_details=game_details(player),
        total_games=owned.response.game_count,
        top_playing_games=top_games(owned),
        realname=player.realname or "Not set",
        primary_clan_id=player.primaryclanid or "Not set",
        profile_state=player.profilestate or 0,
        community_visibility_state=player.communityvisibilitystate or 0,
        comment_permission=player.commentpermission or 0,
        country=player.loccountrycode or "Not set",
        state=player.locstatecode or "Not set",
        city=player.loccityid or "Not set",
        account_created=iso_from_unix(player.timecreated),
        last_logoff=iso_from_unix(player.lastlogoff),
        timestamp=utc_now_iso(),
    )


def normalize_friend_list(raw: dict) -> FriendListResult:
    payload = FriendListPayload.model_validate(raw)
    friends = payload.friendslist.friends if payload.friendslist else None

    entries = []
    error = None
    if friends:
        entries = [
            FriendEntry(
                steamid=friend.steamid,
                relationship=friend.relationship,
                friend_since=iso_from_unix(friend.friend_since),
            )
            for friend in friends
        ]
    elif friends is not None:
        error = NO_FRIENDS
    else:
        error = FRIENDS_UNAUTHORIZED

    if error:
        logger.warning("Friend list unavailable: {}", error)

    return FriendListResult(
        total_friends=len(entries),
        friends=entries,
        error=error,
        raw_response=raw,
        note=FRIENDS_NOTE,
        timestamp=utc_now_iso(),
    )


def normalize_recent_games(
    raw: dict, limit: int = RECENT_GAMES_LIMIT
) -> RecentGamesResult:
    body = RecentlyPlayedGames.model_validate(raw).response

    entries = []
    error = None
    if body and body.games is not None:
        entries = [
            RecentGameEntry(
                name=game.name,
                appid=game.appid,
                playtime_2weeks=format_playtime(game.playtime_2weeks or 0),
                playtime_forever=format_playtime(game.playtime_forever or 0),
            )
            for game in body.games[:limit]
        ]
    elif body and body.total_count == 0:
        error = NO_RECENT_GAMES
    else:
        error = RECENT_GAMES_UNAUTHORIZED

    if error:
        logger.warning("Recent games unavailable: {}", error)

    return RecentGamesResult(
        total_recent_games=len(entries),
        recent_games=entries,
        error=error,
        raw_response=raw,
        note=RECENT_GAMES_NOTE,
        timestamp=utc_now_iso(),
    )
