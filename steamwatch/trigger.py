import asyncio
from typing import Callable

from loguru import logger

from steamwatch.app_ctx import AppCtx
from steamwatch.dispatcher import execute


async def poll(ctx: AppCtx) -> list[dict]:
    """Emit the current snapshot for the configured action.

    No state is kept between ticks, so every poll re-emits the full record
    even when nothing changed. Failures, unknown actions included, raise
    SteamAPIError just like manual execution.
    """
    logger.info("Poll tick for {}", ctx.get_parameter("action"))
    return await execute(ctx)


async def poll_forever(
    ctx: AppCtx,
    interval: float,
    handler: Callable[[list[dict]], None],
    limit: int | None = None,
) -> int:
    """Poll every `interval` seconds, passing each snapshot to `handler`.

    Stops after `limit` ticks when given. Returns the number of ticks run.
    """
    ticks = 0
    while limit is None or ticks < limit:
        if ticks:
            await asyncio.sleep(interval)
        handler(await poll(ctx))
        ticks += 1
    return ticks
