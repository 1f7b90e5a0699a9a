from typing import Awaitable, Callable

import aiohttp
from loguru import logger


Transport = Callable[[str, dict], Awaitable[dict]]


async def aiohttp_get(url: str, params: dict) -> dict:
    """GET `url` with query `params` and decode the JSON body.

    Non-2xx responses raise `aiohttp.ClientResponseError`.
    """
    # Query string carries the API key, only the path is logged
    logger.debug("GET {}", url)
    async with aiohttp.ClientSession(raise_for_status=True) as session:
        async with session.get(url, params=params) as response:
            return await response.json(content_type=None)


class BaseAPI:
    base_url: str = ""

    def __init__(self, transport: Transport | None = None):
        self.transport = transport or aiohttp_get

    async def _get(self, url: str, params: dict | None = None) -> dict:
        full_url = self.base_url + url
        return await self.transport(full_url, params or {})
