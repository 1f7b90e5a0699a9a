import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


"""
Upstream models mirror the JSON returned by the Steam Web API. Steam drops fields
it is not allowed to show (private profiles, keys not linked to the queried
account), so every field that may be missing is Optional.

Output models are the flat records handed back to the caller. They serialize
with camelCase keys, see `Record.to_record`.
"""


class Action(str, enum.Enum):
    USER_STATS = "userStats"
    FRIEND_LIST = "friendList"
    RECENT_GAMES = "recentGames"

    @property
    def label(self) -> str:
        return ACTION_LABELS[self][0]

    @property
    def description(self) -> str:
        return ACTION_LABELS[self][1]


ACTION_LABELS = {
    Action.USER_STATS: (
        "User Stats",
        "Get user statistics (name, avatar, total games, etc)",
    ),
    Action.FRIEND_LIST: ("Friend List", "Get list of Steam friends"),
    Action.RECENT_GAMES: (
        "Recent Games",
        "Get recently played games (last 2 weeks)",
    ),
}


class ActionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    steam_id: str
    action: Action


# Upstream payloads


class Player(BaseModel):
    steamid: str
    personaname: Optional[str] = None
    profileurl: Optional[str] = None
    avatarfull: Optional[str] = None
    personastate: Optional[int] = None
    profilestate: Optional[int] = None
    communityvisibilitystate: Optional[int] = None
    commentpermission: Optional[int] = None
    realname: Optional[str] = None
    primaryclanid: Optional[str] = None
    timecreated: Optional[int] = None
    lastlogoff: Optional[int] = None
    gameextrainfo: Optional[str] = None
    gameid: Optional[str] = None
    gameserverip: Optional[str] = None
    loccountrycode: Optional[str] = None
    locstatecode: Optional[str] = None
    loccityid: Optional[int] = None


class PlayerList(BaseModel):
    players: list[Player] = []


class PlayerSummaries(BaseModel):
    response: PlayerList = PlayerList()


class OwnedGame(BaseModel):
    appid: int
    name: Optional[str] = None
    playtime_forever: int = 0


class OwnedGameList(BaseModel):
    game_count: Optional[int] = None
    games: Optional[list[OwnedGame]] = None


class OwnedGames(BaseModel):
    response: OwnedGameList = OwnedGameList()


class Friend(BaseModel):
    steamid: str
    relationship: Optional[str] = None
    friend_since: int = 0


class FriendsList(BaseModel):
    friends: Optional[list[Friend]] = None


class FriendListPayload(BaseModel):
    friendslist: Optional[FriendsList] = None


class RecentGame(BaseModel):
    appid: int
    name: Optional[str] = None
    playtime_2weeks: Optional[int] = None
    playtime_forever: Optional[int] = None


class RecentGameList(BaseModel):
    total_count: Optional[int] = None
    games: Optional[list[RecentGame]] = None


class RecentlyPlayedGames(BaseModel):
    response: Optional[RecentGameList] = None


# Output records


class Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class GameDetails(Record):
    game_name: str
    game_id: Optional[str] = None
    server_ip: Optional[str] = None
    rich_presence: Optional[str] = None


class TopGame(Record):
    name: Optional[str] = None
    playtime: str


class UserStats(Record):
    action: Action = Action.USER_STATS
    personaname: Optional[str] = None
    steamid: str
    profileurl: Optional[str] = None
    avatar: Optional[str] = None
    personastate: Optional[int] = None
    status: str
    playing_game: str = "Not playing game"
    game_details: Optional[GameDetails] = None
    total_games: Optional[int] = None
    top_playing_games: list[TopGame] = []
    realname: str = "Not set"
    primary_clan_id: str = "Not set"
    profile_state: int = 0
    community_visibility_state: int = 0
    comment_permission: int = 0
    country: str = "Not set"
    state: str = "Not set"
    city: int | str = "Not set"
    account_created: Optional[str] = None
    last_logoff: Optional[str] = None
    timestamp: str


class FriendEntry(Record):
    steamid: str
    relationship: Optional[str] = None
    friend_since: str


class FriendListResult(Record):
    action: Action = Action.FRIEND_LIST
    total_friends: int = 0
    friends: list[FriendEntry] = []
    error: Optional[str] = None
    raw_response: dict = {}
    note: str = ""
    timestamp: str


class RecentGameEntry(Record):
    name: Optional[str] = None
    appid: int
    playtime_2weeks: str = Field(alias="playtime2weeks")
    playtime_forever: str


class RecentGamesResult(Record):
    action: Action = Action.RECENT_GAMES
    total_recent_games: int = 0
    recent_games: list[RecentGameEntry] = []
    error: Optional[str] = None
    raw_response: dict = {}
    note: str = ""
    timestamp: str
