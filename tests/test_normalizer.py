from datetime import datetime, timezone

import pytest

from steamwatch.normalizer import (
    FRIENDS_UNAUTHORIZED,
    NO_FRIENDS,
    NO_RECENT_GAMES,
    RECENT_GAMES_UNAUTHORIZED,
    PlayerNotFoundError,
    normalize_friend_list,
    normalize_recent_games,
    normalize_user_stats,
)


STEAM_ID = "76561197960434622"


def test_user_stats_profile_fields(player_summaries, owned_games):
    record = normalize_user_stats(STEAM_ID, player_summaries, owned_games).to_record()

    assert record["action"] == "userStats"
    assert record["personaname"] == "Robin"
    assert record["steamid"] == STEAM_ID
    assert record["avatar"] == "https://avatars.steamstatic.com/full.jpg"
    assert record["personastate"] == 1
    assert record["status"] == "Online"
    assert record["playingGame"] == "Not playing game"
    assert record["gameDetails"] is None
    assert record["totalGames"] == 7
    assert record["realname"] == "Robin Walker"
    assert record["primaryClanId"] == "103582791429521412"
    assert record["profileState"] == 1
    assert record["communityVisibilityState"] == 3
    assert record["commentPermission"] == 0
    assert record["country"] == "US"
    assert record["state"] == "WA"
    assert record["city"] == 3961
    assert record["accountCreated"] == "2003-09-12T22:59:49.000Z"
    assert record["lastLogoff"] == "2023-11-14T22:13:20.000Z"
    assert record["timestamp"].endswith("Z")


def test_user_stats_top_games_sorted_and_stable(player_summaries, owned_games):
    record = normalize_user_stats(STEAM_ID, player_summaries, owned_games).to_record()

    assert record["topPlayingGames"] == [
        {"name": "Team Fortress Classic", "playtime": "8h 20m"},
        {"name": "Opposing Force", "playtime": "8h 20m"},
        {"name": "Deathmatch Classic", "playtime": "2h 5m"},
        {"name": "Half-Life", "playtime": "1h 0m"},
        {"name": "Ricochet", "playtime": "59m"},
    ]


def test_user_stats_private_library(player_summaries):
    record = normalize_user_stats(
        STEAM_ID, player_summaries, {"response": {}}
    ).to_record()

    assert record["topPlayingGames"] == []
    assert record["totalGames"] is None


def test_user_stats_missing_optional_fields():
    summaries = {"response": {"players": [{"steamid": STEAM_ID, "personastate": 9}]}}
    record = normalize_user_stats(STEAM_ID, summaries, {"response": {}}).to_record()

    assert record["status"] == "Unknown"
    assert record["realname"] == "Not set"
    assert record["country"] == "Not set"
    assert record["city"] == "Not set"
    assert record["profileState"] == 0
    assert record["accountCreated"] is None
    assert record["lastLogoff"] is None


def test_user_stats_current_game_with_rich_presence(player_summaries, owned_games):
    player = player_summaries["response"]["players"][0]
    player.update(
        gameextrainfo="Half-Life: Alyx", gameid="546560", gameserverip="10.0.0.1:27015"
    )

    record = normalize_user_stats(STEAM_ID, player_summaries, owned_games).to_record()

    assert record["playingGame"] == "Half-Life: Alyx"
    assert record["gameDetails"] == {
        "gameName": "Half-Life: Alyx",
        "gameId": "546560",
        "serverIp": "10.0.0.1:27015",
        "richPresence": "Half-Life: Alyx",
    }


def test_user_stats_current_game_without_rich_presence(player_summaries, owned_games):
    player_summaries["response"]["players"][0]["gameextrainfo"] = "Portal 2"

    record = normalize_user_stats(STEAM_ID, player_summaries, owned_games).to_record()

    assert record["gameDetails"]["richPresence"] is None
    assert record["gameDetails"]["gameId"] is None


def test_user_stats_unknown_player(owned_games):
    with pytest.raises(PlayerNotFoundError, match=STEAM_ID):
        normalize_user_stats(STEAM_ID, {"response": {"players": []}}, owned_games)


def test_friend_list_mapped():
    raw = {
        "friendslist": {
            "friends": [
                {"steamid": "1", "relationship": "friend", "friend_since": 1234567890},
                {"steamid": "2", "relationship": "friend", "friend_since": 0},
            ]
        }
    }

    record = normalize_friend_list(raw).to_record()

    assert record["action"] == "friendList"
    assert record["totalFriends"] == 2
    assert record["error"] is None
    assert record["rawResponse"] == raw
    assert record["note"]
    first = record["friends"][0]
    assert first == {
        "steamid": "1",
        "relationship": "friend",
        "friendSince": "2009-02-13T23:31:30.000Z",
    }
    since = datetime.fromisoformat(first["friendSince"].replace("Z", "+00:00"))
    assert since == datetime.fromtimestamp(1234567890, tz=timezone.utc)


def test_friend_list_present_but_empty():
    record = normalize_friend_list({"friendslist": {"friends": []}}).to_record()

    assert record["friends"] == []
    assert record["error"] == NO_FRIENDS


@pytest.mark.parametrize("raw", [{}, {"friendslist": {}}])
def test_friend_list_absent(raw):
    record = normalize_friend_list(raw).to_record()

    assert record["friends"] == []
    assert record["totalFriends"] == 0
    assert record["error"] == FRIENDS_UNAUTHORIZED
    assert record["rawResponse"] == raw


def test_recent_games_capped_in_upstream_order():
    games = [
        {"appid": i, "name": f"Game {i}", "playtime_2weeks": i, "playtime_forever": i * 60}
        for i in range(12, 0, -1)
    ]

    record = normalize_recent_games({"response": {"total_count": 12, "games": games}})
    out = record.to_record()

    assert out["totalRecentGames"] == 10
    assert [game["appid"] for game in out["recentGames"]] == list(range(12, 2, -1))
    assert out["recentGames"][0] == {
        "name": "Game 12",
        "appid": 12,
        "playtime2weeks": "12m",
        "playtimeForever": "12h 0m",
    }
    assert out["error"] is None


def test_recent_games_missing_playtime_defaults_to_zero():
    raw = {"response": {"total_count": 1, "games": [{"appid": 440, "name": "TF2"}]}}

    out = normalize_recent_games(raw).to_record()

    assert out["recentGames"] == [
        {"name": "TF2", "appid": 440, "playtime2weeks": "0m", "playtimeForever": "0m"}
    ]


def test_recent_games_none_played():
    out = normalize_recent_games({"response": {"total_count": 0}}).to_record()

    assert out["recentGames"] == []
    assert out["error"] == NO_RECENT_GAMES


@pytest.mark.parametrize("raw", [{}, {"response": {}}])
def test_recent_games_private(raw):
    out = normalize_recent_games(raw).to_record()

    assert out["recentGames"] == []
    assert out["error"] == RECENT_GAMES_UNAUTHORIZED
    assert out["rawResponse"] == raw
