"""Session engine - drives the idle -> calculating -> loading-message -> result workflow.

One engine owns exactly one ``Session``. All transitions run on the event
loop thread; the only concurrency is the progress timer task and the
message task, each tagged with the generation that started it so a
``reset()`` makes any late completion a no-op.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from lovecalc.core.exceptions import NameValidationError
from lovecalc.models.session import Session, SessionStatus
from lovecalc.schemas.session import SessionView
from lovecalc.services.llm_service import CALL_FAILED_MESSAGE, MessageProvider
from lovecalc.services.score_service import compute_score

logger = logging.getLogger(__name__)

EMPTY_NAMES_ERROR = "Please enter both names!"

Listener = Callable[[SessionView], None]


class SessionEngine:
    """Owns the single in-memory session and its progress timer."""

    def __init__(
        self,
        provider: MessageProvider,
        tick_interval: float = 0.04,
        scorer: Callable[[str, str], int] = compute_score,
    ):
        self.provider = provider
        self.tick_interval = tick_interval
        self.scorer = scorer
        self.session = Session()
        self.generation = 0
        self._timer: asyncio.Task | None = None
        self._message_task: asyncio.Task | None = None
        self._listeners: list[Listener] = []

    # --- Observation ---

    def view(self) -> SessionView:
        s = self.session
        return SessionView(
            status=s.status,
            name1=s.name1,
            name2=s.name2,
            percentage=s.percentage,
            progress=s.progress,
            message=s.message,
            error=s.validation_error,
            generation=self.generation,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with a fresh view after every change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        view = self.view()
        for listener in list(self._listeners):
            listener(view)

    # --- Transitions ---

    def submit_names(self, name1: str, name2: str) -> SessionView:
        """Handle the "calculate" action. Must be called on the event loop."""
        if self.session.status is not SessionStatus.IDLE:
            logger.debug("Ignoring calculate while %s", self.session.status.value)
            return self.view()

        name1, name2 = name1.strip(), name2.strip()
        if not name1 or not name2:
            self.session.validation_error = EMPTY_NAMES_ERROR
            logger.info("Rejected calculate with an empty name")
            self._notify()
            raise NameValidationError(EMPTY_NAMES_ERROR)

        s = self.session
        s.validation_error = None
        s.name1, s.name2 = name1, name2
        s.percentage = self.scorer(name1, name2)
        s.progress = 0
        s.status = SessionStatus.CALCULATING
        self._timer = asyncio.create_task(self._run_timer(self.generation))
        self._notify()
        return self.view()

    def tick(self) -> bool:
        """Advance the progress counter one step.

        Returns True while further ticks are needed. The tick that brings
        progress up to the percentage also moves the session to
        loading-message and starts the message request.
        """
        s = self.session
        if s.status is not SessionStatus.CALCULATING:
            return False

        s.progress += 1
        if s.progress < s.percentage:
            self._notify()
            return True

        s.status = SessionStatus.LOADING_MESSAGE
        if self._timer is not None and self._timer is not asyncio.current_task():
            self._timer.cancel()
        self._timer = None
        self._message_task = asyncio.create_task(
            self._fetch_message(self.generation, s.name1, s.name2, s.percentage)
        )
        self._notify()
        return False

    def reset(self) -> SessionView:
        """Handle the "try again" action from any state."""
        self.generation += 1
        self._cancel_tasks()
        self.session = Session()
        self._notify()
        return self.view()

    # --- Background work ---

    async def _run_timer(self, generation: int) -> None:
        while generation == self.generation:
            await asyncio.sleep(self.tick_interval)
            if generation != self.generation or not self.tick():
                break

    async def _fetch_message(
        self, generation: int, name1: str, name2: str, percentage: int
    ) -> None:
        try:
            message = await self.provider.generate(name1, name2, percentage)
        except Exception:
            logger.exception("Message provider failed")
            message = CALL_FAILED_MESSAGE
        if generation != self.generation:
            logger.info("Discarding message from superseded session %d", generation)
            return
        self.session.message = message
        self.session.status = SessionStatus.RESULT
        self._message_task = None
        self._notify()

    def _cancel_tasks(self) -> list[asyncio.Task]:
        cancelled = []
        for task in (self._timer, self._message_task):
            if task is not None and not task.done():
                task.cancel()
                cancelled.append(task)
        self._timer = None
        self._message_task = None
        return cancelled

    async def settle(self) -> SessionView:
        """Wait until the running calculation (if any) has its result."""
        if self._timer is not None and not self._timer.done():
            await asyncio.wait({self._timer})
        if self._message_task is not None and not self._message_task.done():
            await asyncio.wait({self._message_task})
        return self.view()

    async def aclose(self) -> None:
        """Cancel outstanding tasks (app shutdown)."""
        self.generation += 1
        pending = self._cancel_tasks()
        if pending:
            await asyncio.wait(pending)
