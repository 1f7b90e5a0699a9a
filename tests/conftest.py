"""Pytest configuration and shared fixtures."""
import pytest

from steamwatch.app_ctx import AppCtx
from steamwatch.apis.secrets import SteamCredentials


API_KEY = "TESTKEY123"
STEAM_ID = "76561197960434622"


class FakeTransport:
    """In-memory transport answering by endpoint path.

    `responses` maps a path suffix like "GetFriendList/v1/" to a payload dict
    or to an exception instance to raise.
    """

    def __init__(self, responses: dict):
        self.responses = responses
        self.calls = []

    async def __call__(self, url: str, params: dict) -> dict:
        self.calls.append((url, dict(params)))
        for suffix, payload in self.responses.items():
            if url.endswith(suffix):
                if isinstance(payload, Exception):
                    raise payload
                return payload
        raise AssertionError(f"unexpected request to {url}")


@pytest.fixture()
def fake_transport():
    return FakeTransport


@pytest.fixture()
def make_ctx():
    def _make(action="userStats", steam_id=STEAM_ID, transport=None):
        return AppCtx(
            credentials=SteamCredentials(api_key=API_KEY),
            parameters={"steamId": steam_id, "action": action},
            transport=transport,
        )

    return _make


@pytest.fixture()
def player_summaries():
    return {
        "response": {
            "players": [
                {
                    "steamid": STEAM_ID,
                    "communityvisibilitystate": 3,
                    "profilestate": 1,
                    "personaname": "Robin",
                    "profileurl": "https://steamcommunity.com/id/robinwalker/",
                    "avatarfull": "https://avatars.steamstatic.com/full.jpg",
                    "personastate": 1,
                    "realname": "Robin Walker",
                    "primaryclanid": "103582791429521412",
                    "timecreated": 1063407589,
                    "lastlogoff": 1700000000,
                    "loccountrycode": "US",
                    "locstatecode": "WA",
                    "loccityid": 3961,
                }
            ]
        }
    }


@pytest.fixture()
def owned_games():
    return {
        "response": {
            "game_count": 7,
            "games": [
                {"appid": 10, "name": "Counter-Strike", "playtime_forever": 30},
                {"appid": 20, "name": "Team Fortress Classic", "playtime_forever": 500},
                {"appid": 30, "name": "Day of Defeat", "playtime_forever": 0},
                {"appid": 40, "name": "Deathmatch Classic", "playtime_forever": 125},
                {"appid": 50, "name": "Opposing Force", "playtime_forever": 500},
                {"appid": 60, "name": "Ricochet", "playtime_forever": 59},
                {"appid": 70, "name": "Half-Life", "playtime_forever": 60},
            ],
        }
    }
