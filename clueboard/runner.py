import asyncio
import threading
from typing import Any, Awaitable, Callable, Optional, TypeVar

T = TypeVar('T')


class LoopRunner:
    """
    Runs one asyncio event loop on a daemon thread so synchronous callers (request
    handlers) can drive a GameBoard. Every call is executed on that single loop, which
    also serializes commands: two submissions never interleave.
    """

    def __init__(self, timeout: Optional[float] = 30):
        self.timeout = timeout
        self.loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._serve, name='clueboard-loop', daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()

    def run(self, coro: Awaitable[T]) -> T:
        future = asyncio.run_coroutine_threadsafe(coro, self.loop)
        return future.result(self.timeout)

    def call(self, func: Callable[..., T], *args: Any) -> T:
        """Run a plain function on the loop thread and return its result."""
        async def invoke() -> T:
            return func(*args)
        return self.run(invoke())

    def stop(self) -> None:
        if self.loop.is_running():
            self.loop.call_soon_threadsafe(self.loop.stop)
        self._thread.join(self.timeout)
        if not self._thread.is_alive() and not self.loop.is_closed():
            self.loop.close()
