"""Encapsulates the Steam API key credential."""

import asyncio
import json
from pathlib import Path

import aiohttp
from loguru import logger
from pydantic import BaseModel, SecretStr

from steamwatch.apis.base import Transport
from steamwatch.apis.steam import SteamAPI
from steamwatch.settings import settings


SECRETS_FILE = Path(__file__).parent.parent.parent / "secrets.json"

CREDENTIAL_DISPLAY_NAME = "Steam API Key"
DOCUMENTATION_URL = "https://steamcommunity.com/dev/apikey"


class MissingCredentialsError(Exception):
    pass


class SteamCredentials(BaseModel):
    api_key: SecretStr


def _load_secrets_file() -> dict:
    # Shared with other tools, the Steam key lives under "steam"
    if not SECRETS_FILE.exists():
        return {}

    with open(SECRETS_FILE) as f:
        return json.load(f)


def _save_secrets_file(secrets: dict) -> None:
    SECRETS_FILE.parent.mkdir(parents=True, exist_ok=True)
    with open(SECRETS_FILE, "w") as f:
        json.dump(secrets, f, indent=2)


def get_steam_secrets() -> SteamCredentials:
    """Get the Steam API key from settings or the secrets.json file.

    The STEAMWATCH_API_KEY environment variable wins over the file.

    Raises:
        MissingCredentialsError: when neither source has a key.
    """
    api_key = settings.API_KEY.get_secret_value()
    if not api_key:
        api_key = _load_secrets_file().get("steam", {}).get("api_key", "")

    if not api_key:
        raise MissingCredentialsError(
            f"No {CREDENTIAL_DISPLAY_NAME} configured. "
            f"Get one at {DOCUMENTATION_URL} and run `login` "
            "or set STEAMWATCH_API_KEY."
        )

    return SteamCredentials(api_key=api_key)


def save_steam_secrets(api_key: str) -> None:
    """Save the Steam API key to secrets.json, keeping other entries."""
    secrets = _load_secrets_file()
    secrets["steam"] = {"api_key": api_key}
    _save_secrets_file(secrets)


async def verify_credentials(
    credentials: SteamCredentials, transport: Transport | None = None
) -> bool:
    """Check that Steam accepts the key by listing apps with it."""
    api = SteamAPI(credentials.api_key.get_secret_value(), transport=transport)
    try:
        await api.get_app_list()
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        # The error text embeds the request URL, key included.
        # ValueError covers a 200 page that is not JSON
        logger.warning(
            "Steam rejected the API key ({})", getattr(e, "status", type(e).__name__)
        )
        return False

    logger.info("Steam API key is valid")
    return True
