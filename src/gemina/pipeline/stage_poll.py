"""Poll Stage - Wait for the prediction of an uploaded document.

Repeats GET /business_documents/{external_id} with a fixed delay while the
server answers 202 (still processing) or 404 (not indexed yet). Polling
is bounded by an attempt cap and an optional deadline, and can be cancelled
through a threading.Event, which also cuts a pending delay short.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from pydantic import ValidationError

from gemina.api import GeminaClient
from gemina.config import Settings
from gemina.errors import (
    PollingCancelledError,
    PollingTimeoutError,
    UnexpectedStatusError,
)
from gemina.logging import get_logger
from gemina.models import BUSINESS_DOCUMENTS_PATH, Outcome, Prediction
from gemina.status import classify_poll, should_retry

logger = get_logger(__name__)


@dataclass
class PollResult:
    """Terminal success of a poll loop."""

    prediction: Prediction
    raw: dict[str, Any] = field(default_factory=dict)
    attempts: int = 1


class PredictionPoller:
    """Polls the retrieval endpoint until a prediction is ready.

    The sleep and clock callables are injectable so the loop can be
    driven without real delays.
    """

    def __init__(
        self,
        client: GeminaClient,
        poll_interval_seconds: float = 1.0,
        max_attempts: Optional[int] = 120,
        deadline_seconds: Optional[float] = None,
        sleep: Optional[Callable[[float], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize poller.

        Args:
            client: API client used for retrieval requests.
            poll_interval_seconds: Fixed delay between attempts.
            max_attempts: Maximum number of requests, None for no cap.
            deadline_seconds: Maximum elapsed time, None for no deadline.
            sleep: Delay function. When omitted the delay waits on the
                cancellation event, if any, so cancelling interrupts it.
            clock: Monotonic time source in seconds.
        """
        if poll_interval_seconds < 0:
            raise ValueError("poll_interval_seconds must be non-negative")
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if deadline_seconds is not None and deadline_seconds <= 0:
            raise ValueError("deadline_seconds must be positive")

        self.client = client
        self.poll_interval_seconds = poll_interval_seconds
        self.max_attempts = max_attempts
        self.deadline_seconds = deadline_seconds
        self.sleep = sleep
        self.clock = clock

    @classmethod
    def from_settings(cls, client: GeminaClient, settings: Settings, **kwargs: Any) -> "PredictionPoller":
        """Create a poller using the polling limits in settings."""
        return cls(
            client,
            poll_interval_seconds=settings.poll_interval_seconds,
            max_attempts=settings.max_attempts,
            deadline_seconds=settings.deadline_seconds,
            **kwargs,
        )

    def _deadline_reached(self, started: float) -> bool:
        if self.deadline_seconds is None:
            return False
        # Stop now if sleeping again would overrun the deadline
        elapsed = self.clock() - started
        return elapsed + self.poll_interval_seconds > self.deadline_seconds

    def _pause(self, cancel_event: Optional[threading.Event]) -> None:
        if self.sleep is not None:
            self.sleep(self.poll_interval_seconds)
        elif cancel_event is not None:
            cancel_event.wait(self.poll_interval_seconds)
        else:
            time.sleep(self.poll_interval_seconds)

    def poll(
        self,
        external_id: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> PollResult:
        """Poll until the prediction is ready.

        Args:
            external_id: Identifier the document was uploaded with.
            cancel_event: Optional signal checked before every request and
                after every delay.

        Returns:
            PollResult with the parsed prediction and raw body.

        Raises:
            UnexpectedStatusError: For any status other than 200, 202 or 404.
            PollingTimeoutError: When the attempt cap or deadline is hit.
            PollingCancelledError: When cancel_event is set.
        """
        endpoint = f"{BUSINESS_DOCUMENTS_PATH}/{external_id}"
        started = self.clock()
        attempts = 0
        last_status: Optional[int] = None

        while True:
            if cancel_event is not None and cancel_event.is_set():
                logger.warning("Polling cancelled", external_id=external_id, attempts=attempts)
                raise PollingCancelledError(external_id, attempts)

            attempts += 1
            response = self.client.get_prediction(external_id)
            last_status = response.status_code
            outcome = classify_poll(response.status_code)

            if outcome == Outcome.READY:
                try:
                    prediction = Prediction.model_validate(response.body)
                except ValidationError as e:
                    # The raw body is still returned as the result
                    logger.warning(
                        "Prediction body does not match the expected fields",
                        external_id=external_id,
                        error=str(e),
                    )
                    prediction = Prediction()
                logger.info("Prediction ready", external_id=external_id, attempts=attempts)
                return PollResult(prediction=prediction, raw=response.body, attempts=attempts)

            if not should_retry(outcome):
                logger.error(
                    "Prediction request failed",
                    external_id=external_id,
                    status_code=response.status_code,
                )
                raise UnexpectedStatusError(response.status_code, endpoint, response.text)

            if self.max_attempts is not None and attempts >= self.max_attempts:
                raise PollingTimeoutError(external_id, attempts, last_status)
            if self._deadline_reached(started):
                raise PollingTimeoutError(external_id, attempts, last_status)

            if outcome == Outcome.PENDING:
                logger.info(
                    "Document is still being processed",
                    external_id=external_id,
                    attempt=attempts,
                    retry_in=self.poll_interval_seconds,
                )
            else:
                logger.info(
                    "Document not found yet, waiting for it to be created",
                    external_id=external_id,
                    attempt=attempts,
                    retry_in=self.poll_interval_seconds,
                )
            self._pause(cancel_event)
