"""Workflow-level result model."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from .base import Outcome
from .prediction import Prediction
from .upload import UploadResponse


class WorkflowResult(BaseModel):
    """Outcome of a complete upload-then-poll run."""

    external_id: str
    upload_outcome: Optional[Outcome] = None
    upload: Optional[UploadResponse] = None
    prediction: Prediction
    raw_prediction: dict[str, Any] = Field(default_factory=dict)
    poll_attempts: int = Field(..., ge=1)
