"""Polling loop that pulls the scoreboard from the remote spreadsheet source."""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from rallyboard.exceptions import RemoteFetchError
from rallyboard.scoreboard import Scoreboard
from rallyboard.state import parse_json

_logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "cache-control": "no-cache",
    "pragma": "no-cache",
    "accept": "application/json",
}


class RemoteSync:
    """Repeating poll of the remote source.

    One tick runs at a time: the interval is slept only after the previous
    tick finished, however long its request took. Ticks are independent, a
    failed tick leaves nothing behind for the next one.
    """

    def __init__(
        self,
        scoreboard: Scoreboard,
        session: aiohttp.ClientSession,
        url: str,
        interval: float = 1.0,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.scoreboard = scoreboard
        self.session = session
        self.url = url
        self.interval = interval
        self.log = logger or _logger
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def fetch_snapshot(self) -> Any:
        try:
            async with self.session.get(self.url, headers=NO_CACHE_HEADERS) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise RemoteFetchError(f"HTTP {resp.status}", status=resp.status, url=self.url)
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as exc:
            raise RemoteFetchError(f"Request failed: {exc}", url=self.url) from exc

        try:
            return parse_json(text)
        except ValueError as exc:
            raise RemoteFetchError(f"Invalid JSON: {text[:64]!r}", url=self.url) from exc

    async def poll_once(self) -> bool:
        """Run a single tick. Returns True if the stored record changed."""
        try:
            snapshot = await self.fetch_snapshot()
        except RemoteFetchError as exc:
            self.log.warning("Remote poll failed: %s", exc)
            return False
        return self.scoreboard.apply_remote(snapshot)

    async def run(self) -> None:
        """Poll now, then again `interval` seconds after each tick completes"""
        self.log.info("Polling %s every %.3fs", self.url, self.interval)
        while True:
            await self.poll_once()
            await asyncio.sleep(self.interval)

    def start(self) -> asyncio.Task:
        if not self.running:
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
