"""Retry controller for a single asynchronous operation.

Drives one operation through repeated attempts, classifying each failure and
suspending between attempts for the backoff (or server-directed) delay. The
suspension is an ``await`` on the event loop, so unrelated work keeps
running while a request waits to be retried.
"""

import asyncio
import random
from typing import Any, Awaitable, Callable

import structlog
from infrastructure.operations.classifiers import get_error_status, is_retryable_error
from infrastructure.resilience.retry.backoff import (
    resolve_retry_delay,
    retry_after_from_response,
)
from infrastructure.resilience.retry.config import RetryPolicy
from infrastructure.resilience.retry.models import AttemptContext

logger = structlog.get_logger()

Operation = Callable[[], Awaitable[Any]]


class RetryController:
    """Executes operations with classification-driven retry.

    Attributes:
        sleep: Coroutine function used to wait, called with seconds
        rand: Random source in [0, 1) used for jitter

    Example:
        controller = RetryController()
        result = await controller.execute(
            lambda: client.transcribe(audio),
            RetryPolicy(max_attempts=3),
            "transcription",
        )
    """

    def __init__(
        self,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        rand: Callable[[], float] = random.random,
    ) -> None:
        self.sleep = sleep
        self.rand = rand
        self.log = logger.bind(component="retry_controller")

    async def execute(self, operation: Operation, policy: RetryPolicy, label: str) -> Any:
        """Run an operation until it succeeds or can no longer be retried.

        Args:
            operation: Zero-argument callable returning an awaitable
            policy: RetryPolicy in force
            label: Human-readable label for logs

        Returns:
            The operation's result

        Raises:
            Exception: The last failure, unchanged, once attempts are
                exhausted or on the first non-retryable failure
        """
        return await self.run(operation, AttemptContext(label=label, policy=policy))

    async def run(self, operation: Operation, context: AttemptContext) -> Any:
        """Retry loop over an explicit AttemptContext.

        ``context.attempt`` holds the number of the last attempt made once
        this returns or raises.
        """
        policy = context.policy
        log = self.log.bind(label=context.label)

        while True:
            try:
                result = await operation()
            except Exception as exc:
                if not self._should_retry(exc, context):
                    self._log_final_failure(log, exc, context)
                    raise

                server_delay_ms = retry_after_from_response(
                    getattr(exc, "response", None)
                )
                delay_ms = resolve_retry_delay(
                    context.attempt, policy, server_delay_ms, rand=self.rand
                )
                log.warning(
                    "request_attempt_failed_retrying",
                    attempt=context.attempt,
                    max_attempts=policy.max_attempts,
                    status=get_error_status(exc),
                    delay_ms=round(delay_ms),
                    server_directed=server_delay_ms is not None,
                    error=str(exc),
                )
                await self.sleep(delay_ms / 1000)
                context.attempt += 1
                continue

            if context.attempt > 1:
                log.info(
                    "request_succeeded_after_retry",
                    attempts=context.attempt,
                )
            return result

    def _should_retry(self, exc: Exception, context: AttemptContext) -> bool:
        if not context.policy.enabled:
            return False
        if context.is_last_attempt:
            return False
        return is_retryable_error(exc)

    def _log_final_failure(self, log: Any, exc: Exception, context: AttemptContext) -> None:
        if not is_retryable_error(exc):
            log.warning(
                "request_failed_non_retryable",
                attempt=context.attempt,
                status=get_error_status(exc),
                error=str(exc),
            )
        elif context.policy.retries_allowed:
            log.warning(
                "request_failed_attempts_exhausted",
                attempts=context.attempt,
                max_attempts=context.policy.max_attempts,
                error=str(exc),
            )
        else:
            log.warning(
                "request_failed_retry_disabled",
                status=get_error_status(exc),
                error=str(exc),
            )
