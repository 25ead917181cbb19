"""
Pacing policies for the batch executor.

The executor awaits ``policy.wait()`` after every command, whether the
send succeeded or failed, so AbletonOSC is not flooded with a burst of
datagrams it may drop.
"""

import asyncio


DEFAULT_DELAY_S = 0.1


class PacingPolicy:
    """Base policy: no pause between commands."""

    async def wait(self, index: int, total: int):
        """Called after command ``index`` (0-based) of ``total``."""
        return None


class FixedDelayPacing(PacingPolicy):
    """Sleep a fixed duration after each command, including the last.

    Not adaptive: no jitter, no backoff.
    """

    def __init__(self, delay_s: float = DEFAULT_DELAY_S):
        if delay_s < 0:
            raise ValueError(f"delay_s must be >= 0, got {delay_s}")
        self.delay_s = delay_s

    async def wait(self, index: int, total: int):
        await asyncio.sleep(self.delay_s)

    def __repr__(self):
        return f"FixedDelayPacing(delay_s={self.delay_s})"


def from_milliseconds(delay_ms: float) -> PacingPolicy:
    """Build the default policy from a millisecond value (0 disables pacing)."""
    if delay_ms < 0:
        raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
    if delay_ms == 0:
        return PacingPolicy()
    return FixedDelayPacing(delay_ms / 1000.0)
