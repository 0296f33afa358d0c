"""Pacing policies for the batch loop."""

import asyncio
from typing import Protocol


class Pacer(Protocol):
    async def wait(self) -> None: ...


class FixedIntervalPacer:
    """Sleep a fixed delay between batch items."""

    def __init__(self, delay: float):
        self.delay = delay

    async def wait(self) -> None:
        if self.delay > 0:
            await asyncio.sleep(self.delay)


class NullPacer:
    async def wait(self) -> None:
        return None
