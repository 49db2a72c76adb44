"""Pipeline stages for the Gemina invoice client.

1. stage_upload - Submit the document (file or URL) once
2. stage_poll - Poll for the prediction until it is ready

The workflow module chains both stages; each stage can also be used
on its own (e.g. to resume polling for an earlier upload).
"""

from .stage_poll import PollResult, PredictionPoller
from .stage_upload import DocumentUploader
from .workflow import fetch_prediction, run_workflow

__all__ = [
    # Upload
    "DocumentUploader",
    # Poll
    "PollResult",
    "PredictionPoller",
    # Workflow
    "run_workflow",
    "fetch_prediction",
]
