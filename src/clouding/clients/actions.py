from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_result,
    stop_after_attempt,
    stop_any,
    stop_never,
    stop_when_event_set,
    wait_fixed,
)

from clouding.clients.base import ResourceClient
from clouding.core.errors import (
    ActionAttemptsExceededError,
    ActionCancelledError,
    ActionFailedError,
    ActionTimeoutError,
    ResponseDecodeError,
)
from clouding.domain.models import Action, ActionStatus

logger = structlog.get_logger()

ACTION_PATH = "actions"
DEFAULT_POLL_INTERVAL = 5.0

Sleep = Callable[[float], Awaitable[None]]
Clock = Callable[[], float]


class ActionsClient(ResourceClient):
    async def get_action(self, action_id: str) -> Action:
        operation = "getting action"
        response = await self._exchange(
            "GET",
            f"{ACTION_PATH}/{action_id}",
            operation=operation,
            expected=(200,),
        )
        action = self._decode(response, Action, operation)
        # A missing status is neither running nor terminal and would poll forever.
        if action.status is None:
            raise ResponseDecodeError(operation, "action status missing", status_code=response.status_code)
        return action


def _still_running(action: Action) -> bool:
    return not action.is_terminal


def _last_fetched(retry_state: RetryCallState) -> Action:
    return retry_state.outcome.result()  # type: ignore[union-attr]


class ActionPoller:
    """Drive an action to a terminal state by fixed-interval polling.

    There is no backoff. Without a cancel event, timeout or attempt cap the
    loop only ends when the provider reports completed or errored.
    """

    def __init__(
        self,
        actions: ActionsClient,
        *,
        interval: float = DEFAULT_POLL_INTERVAL,
        max_attempts: int | None = None,
        sleep: Sleep = asyncio.sleep,
        clock: Clock = time.monotonic,
    ) -> None:
        self._actions = actions
        self._interval = interval
        self._max_attempts = max_attempts
        self._sleep = sleep
        self._clock = clock

    async def wait(
        self,
        action: Action,
        interval: float | None = None,
        *,
        cancel_event: asyncio.Event | None = None,
        timeout: float | None = None,
        max_attempts: int | None = None,
    ) -> Action:
        """Poll until ``action`` is terminal, updating the handle in place.

        Each iteration is one fetch, one status check and, while the action is
        pending or in progress, one sleep of ``interval`` seconds. A fetch
        error is raised as is. Cancellation and the deadline are only checked
        between fetches, so a fetch already under way always completes.

        Raises:
            ActionFailedError: the provider reported the action as errored.
            ActionCancelledError: ``cancel_event`` was set.
            ActionTimeoutError: ``timeout`` seconds elapsed.
            ActionAttemptsExceededError: ``max_attempts`` fetches were made.
        """
        interval = self._interval if interval is None else interval
        max_attempts = self._max_attempts if max_attempts is None else max_attempts
        deadline = self._clock() + timeout if timeout is not None else None
        log = logger.bind(action_id=action.id, action_type=action.kind)

        def deadline_passed(retry_state: RetryCallState | None = None) -> bool:
            return deadline is not None and self._clock() >= deadline

        stops = []
        if cancel_event is not None:
            stops.append(stop_when_event_set(cancel_event))
        if deadline is not None:
            stops.append(deadline_passed)
        if max_attempts is not None:
            stops.append(stop_after_attempt(max_attempts))

        def log_poll(retry_state: RetryCallState) -> None:
            latest = retry_state.outcome.result()  # type: ignore[union-attr]
            log.debug(
                "action_poll",
                attempt=retry_state.attempt_number,
                status=str(latest.status),
                next_poll_in=interval,
            )

        retrying = AsyncRetrying(
            sleep=self._sleep,
            retry=retry_if_result(_still_running),
            wait=wait_fixed(interval),
            stop=stop_any(*stops) if stops else stop_never,
            before_sleep=log_poll,
            retry_error_callback=_last_fetched,
        )
        latest: Action = await retrying(self._actions.get_action, action.id)

        if latest.status == ActionStatus.errored:
            action.status = latest.status
            action.completed_at = latest.completed_at
            log.error("action_failed", completed_at=latest.completed_at)
            raise ActionFailedError(action.id, latest)

        action.status = latest.status
        action.completed_at = latest.completed_at

        if cancel_event is not None and cancel_event.is_set():
            log.warning("action_wait_cancelled", status=str(latest.status))
            raise ActionCancelledError(action.id, latest)
        if deadline_passed():
            log.warning("action_wait_timed_out", status=str(latest.status))
            raise ActionTimeoutError(action.id, latest)
        if not latest.is_terminal:
            log.warning("action_wait_exhausted", status=str(latest.status), attempts=max_attempts)
            raise ActionAttemptsExceededError(action.id, max_attempts or 0, latest)

        log.info("action_completed", completed_at=latest.completed_at)
        return action
