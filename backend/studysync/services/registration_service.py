from __future__ import annotations

import asyncio
import enum
import logging
import random
from contextlib import contextmanager
from typing import Awaitable, Callable, Iterator, Optional

from studysync.config import Settings
from studysync.services.assignment_engine import Assigned, Clock, Outcome, assign, now_ms, precheck
from studysync.services.errors import SubmissionInProgressError
from studysync.services.roster_store import RosterStore

logger = logging.getLogger(__name__)


class SubmissionState(enum.Enum):
    IDLE = "IDLE"
    SUBMITTING = "SUBMITTING"


class SubmissionGate:
    """Idle -> Submitting -> Idle. Anything submitted while not idle is rejected."""

    def __init__(self):
        self.state = SubmissionState.IDLE

    @contextmanager
    def submitting(self) -> Iterator[None]:
        if self.state is not SubmissionState.IDLE:
            raise SubmissionInProgressError("A registration is already being processed")
        self.state = SubmissionState.SUBMITTING
        try:
            yield
        finally:
            self.state = SubmissionState.IDLE


class RegistrationService:
    def __init__(
        self,
        store: RosterStore,
        gate: SubmissionGate,
        config: Settings,
        *,
        clock: Clock = now_ms,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.store = store
        self.gate = gate
        self.config = config
        self.clock = clock
        self.rng = rng
        self._sleep = sleep

    async def register(self, full_name: str, student_id: Optional[str]) -> Outcome:
        """
        Run one registration through the submission gate.

        Only an ``Assigned`` outcome touches the roster (append + persist);
        every other outcome is returned as-is. A blank name or a closed roster
        is rejected right away, without occupying the gate or waiting.
        """
        rejected = precheck(self.store.snapshot(), (full_name or "").strip(), config=self.config)
        if rejected is not None:
            logger.info(f"Registration not assigned: outcome={rejected.kind}")
            return rejected

        try:
            with self.gate.submitting():
                if self.config.submit_delay_ms > 0:
                    await self._sleep(self.config.submit_delay_ms / 1000)

                outcome = assign(
                    self.store.snapshot(),
                    full_name,
                    student_id,
                    self.clock,
                    config=self.config,
                    rng=self.rng,
                )
                if isinstance(outcome, Assigned):
                    await self.store.append(outcome.record)
                    logger.info(
                        f"Student assigned: id={outcome.record.identity}, group={outcome.record.group_number}, "
                        f"total={len(self.store)}"
                    )
                else:
                    logger.info(f"Registration not assigned: outcome={outcome.kind}")
                return outcome
        except SubmissionInProgressError:
            logger.warning("Registration rejected: another submission is in progress")
            raise
