"""
Rate limiting - Fixed delay between consecutive provider calls.
"""

import asyncio


class FixedDelayLimiter:
    """
    Sleep ``delay_ms`` before every call except the first.

    Callers invoke :meth:`wait` immediately before each call, so no delay
    is spent after the last one. A delay of 0 disables throttling.
    """

    def __init__(self, delay_ms: int = 0):
        self.delay_ms = max(0, delay_ms)
        self._calls = 0

    async def wait(self):
        if self._calls and self.delay_ms:
            await asyncio.sleep(self.delay_ms / 1000)
        self._calls += 1
