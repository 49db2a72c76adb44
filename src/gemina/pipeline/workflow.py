"""Upload-then-poll orchestration."""

import threading
from typing import Optional

from gemina.api import GeminaClient
from gemina.logging import get_logger
from gemina.models import UploadRequest, WorkflowResult
from gemina.pipeline.stage_poll import PredictionPoller
from gemina.pipeline.stage_upload import DocumentUploader

logger = get_logger(__name__)


def run_workflow(
    client: GeminaClient,
    request: UploadRequest,
    poller: Optional[PredictionPoller] = None,
    cancel_event: Optional[threading.Event] = None,
) -> WorkflowResult:
    """Upload a document once, then poll until its prediction is ready.

    Args:
        client: Configured API client.
        request: File or URL upload request.
        poller: Poller to use; built from the client's settings when omitted.
        cancel_event: Optional cancellation signal for the poll loop.

    Returns:
        WorkflowResult with the acknowledgement and the final prediction.
    """
    poller = poller or PredictionPoller.from_settings(client, client.settings)

    outcome, ack = DocumentUploader(client).upload(request)
    result = poller.poll(request.external_id, cancel_event=cancel_event)

    logger.info(
        "Workflow complete",
        external_id=request.external_id,
        upload_outcome=outcome.value,
        poll_attempts=result.attempts,
    )
    return WorkflowResult(
        external_id=request.external_id,
        upload_outcome=outcome,
        upload=ack,
        prediction=result.prediction,
        raw_prediction=result.raw,
        poll_attempts=result.attempts,
    )


def fetch_prediction(
    client: GeminaClient,
    external_id: str,
    poller: Optional[PredictionPoller] = None,
    cancel_event: Optional[threading.Event] = None,
) -> WorkflowResult:
    """Poll for the prediction of a document uploaded earlier."""
    poller = poller or PredictionPoller.from_settings(client, client.settings)
    result = poller.poll(external_id, cancel_event=cancel_event)
    return WorkflowResult(
        external_id=external_id,
        prediction=result.prediction,
        raw_prediction=result.raw,
        poll_attempts=result.attempts,
    )
