from types import MappingProxyType
from typing import Any, Mapping

from steamwatch.apis.base import Transport
from steamwatch.apis.secrets import SteamCredentials, get_steam_secrets
from steamwatch.settings import settings


class AppCtx:
    """Per-invocation context handed to the dispatcher.

    Mirrors what a workflow host provides to a node: the resolved credential,
    the node parameters (`steamId`, `action`) and the HTTP transport. Nothing
    on it can be changed after construction.
    """

    def __init__(
        self,
        credentials: SteamCredentials,
        parameters: Mapping[str, Any],
        transport: Transport | None = None,
    ):
        self._credentials = credentials
        self._parameters = MappingProxyType(dict(parameters))
        self._transport = transport

    @property
    def transport(self) -> Transport | None:
        return self._transport

    @property
    def parameters(self) -> Mapping[str, Any]:
        return self._parameters

    def get_credentials(self) -> SteamCredentials:
        return self._credentials

    def get_parameter(self, name: str, default: Any = None) -> Any:
        return self._parameters.get(name, default)

    @classmethod
    def from_settings(
        cls,
        steam_id: str | None = None,
        action: str | None = None,
        transport: Transport | None = None,
    ) -> "AppCtx":
        """Build a context for CLI use, falling back to settings and secrets."""
        return cls(
            credentials=get_steam_secrets(),
            parameters={
                "steamId": steam_id or settings.STEAM_ID,
                "action": action or settings.ACTION,
            },
            transport=transport,
        )
