# stockmarket/scheduler.py

import asyncio
from typing import Optional
from logger import logger
from stockmarket.simulator import PriceSimulator


class SimulationScheduler:
    """
    Runs the price simulator at a fixed rate on the event loop.

    Each tick runs in a worker thread and finishes before the next one is
    started; a tick that overruns the interval delays the next one.
    Stopping waits for a tick in progress to complete.
    """

    def __init__(self, simulator: PriceSimulator, interval_seconds: float = 30.0):
        self.simulator = simulator
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None
        self._stopping: Optional[asyncio.Event] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        logger.info(f"Starting price simulation every {self.interval_seconds} seconds")
        self._stopping = asyncio.Event()
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._stopping.set()
        await self._task
        self._task = None
        logger.info("Price simulation scheduler stopped")

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        while not self._stopping.is_set():
            started = loop.time()
            try:
                await asyncio.to_thread(self.simulator.simulate_price_changes)
            except Exception as e:
                logger.error(f"Price simulation tick failed: {e}", exc_info=True)
            elapsed = loop.time() - started
            try:
                await asyncio.wait_for(self._stopping.wait(), max(0.0, self.interval_seconds - elapsed))
            except asyncio.TimeoutError:
                pass
