"""Steam Web API client for player, library and friend data."""

from pydantic import BaseModel

from steamwatch.apis.base import BaseAPI, Transport


STEAM_API_URL = "https://api.steampowered.com"


class SteamRequest(BaseModel):
    """A fully described GET against the Steam Web API."""

    path: str
    params: dict[str, str]

    @property
    def url(self) -> str:
        return STEAM_API_URL + self.path


def player_summaries_request(api_key: str, steam_id: str) -> SteamRequest:
    return SteamRequest(
        path="/ISteamUser/GetPlayerSummaries/v2/",
        params={"key": api_key, "steamids": steam_id},
    )


def owned_games_request(api_key: str, steam_id: str) -> SteamRequest:
    return SteamRequest(
        path="/IPlayerService/GetOwnedGames/v1/",
        params={
            "key": api_key,
            "steamid": steam_id,
            "include_appinfo": "true",
            "include_played_free_games": "true",
        },
    )


def recently_played_games_request(api_key: str, steam_id: str) -> SteamRequest:
    return SteamRequest(
        path="/IPlayerService/GetRecentlyPlayedGames/v1/",
        params={"key": api_key, "steamid": steam_id},
    )


def friend_list_request(api_key: str, steam_id: str) -> SteamRequest:
    return SteamRequest(
        path="/ISteamUser/GetFriendList/v1/",
        params={"key": api_key, "steamid": steam_id, "relationship": "friend"},
    )


def app_list_request(api_key: str) -> SteamRequest:
    # Public endpoint, used to check that a key is accepted
    return SteamRequest(path="/ISteamApps/GetAppList/v2/", params={"key": api_key})


class SteamAPI(BaseAPI):
    """Steam API client.

    Every method performs exactly one GET through the transport and returns the
    decoded JSON untouched. Transport errors propagate to the caller.
    """

    base_url = STEAM_API_URL

    def __init__(self, api_key: str, transport: Transport | None = None):
        super().__init__(transport)
        self.api_key = api_key

    async def _send(self, request: SteamRequest) -> dict:
        return await self._get(request.path, request.params)

    async def get_player_summaries(self, steam_id: str) -> dict:
        """
        Get the public profile of a Steam user.

        Returns:
            {"response": {"players": [...]}} with one player per known ID.
        """
        return await self._send(player_summaries_request(self.api_key, steam_id))

    async def get_owned_games(self, steam_id: str) -> dict:
        """
        Get all owned games, including free games that were played.

        Returns:
            {"response": {"game_count": int, "games": [...]}}; "games" is
            missing when the library is private.
        """
        return await self._send(owned_games_request(self.api_key, steam_id))

    async def get_recently_played_games(self, steam_id: str) -> dict:
        return await self._send(recently_played_games_request(self.api_key, steam_id))

    async def get_friend_list(self, steam_id: str) -> dict:
        """
        Get the friend list of a Steam user.

        Steam only answers when the profile is public or the key belongs to
        the queried account; otherwise "friendslist" is missing.
        """
        return await self._send(friend_list_request(self.api_key, steam_id))

    async def get_app_list(self) -> dict:
        return await self._send(app_list_request(self.api_key))
