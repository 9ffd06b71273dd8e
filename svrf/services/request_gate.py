"""
Single-fire barrier that holds media requests until authentication settles.

One authentication round moves the gate IDLE/DONE -> PENDING -> DONE. Every
waiter of a round observes the same outcome; after release the gate stays open
until the next round is entered.
"""

from __future__ import annotations

import asyncio
from enum import Enum


class GateState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    DONE = "done"


class RequestGate:
    """Broadcast the result of one authentication round to all of its waiters."""

    def __init__(self) -> None:
        self._state = GateState.IDLE
        self._future: asyncio.Future[None] | None = None

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def outcome_error(self) -> BaseException | None:
        """Failure broadcast by the last completed round, if any."""
        if self._state is not GateState.DONE or self._future is None:
            return None
        return self._future.exception()

    def enter(self) -> None:
        """Start a new pending round."""
        if self._state is GateState.PENDING:
            raise RuntimeError("Authentication is already pending on this gate.")
        self._future = asyncio.get_running_loop().create_future()
        self._state = GateState.PENDING

    def release(self, error: BaseException | None = None) -> None:
        """Finish the pending round, waking every waiter with the same outcome."""
        if self._state is not GateState.PENDING or self._future is None:
            raise RuntimeError("Gate released without a pending authentication.")
        if error is None:
            self._future.set_result(None)
        else:
            self._future.set_exception(error)
            # Waiters are optional; mark the exception retrieved.
            self._future.exception()
        self._state = GateState.DONE

    async def wait(self) -> None:
        """Wait for the current round and raise its failure, if it failed.

        Cancelling a waiter never cancels the round itself.
        """
        if self._future is None:
            raise RuntimeError("Gate has not been entered yet.")
        await asyncio.shield(self._future)


__all__ = ["GateState", "RequestGate"]
