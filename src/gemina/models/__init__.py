"""Pydantic models for the Gemina invoice recognition API.

Model Hierarchy:
- UploadRequest → UploadResponse (acknowledgement only)
- Prediction → GeneralValue → Coordinates
- WorkflowResult bundles both sides of one upload-then-poll run
"""

from .base import (
    BUSINESS_DOCUMENTS_PATH,
    UPLOAD_PATH,
    WEB_UPLOAD_PATH,
    BaseApiModel,
    Outcome,
    new_external_id,
)
from .prediction import (
    Coordinates,
    GeneralValue,
    Prediction,
)
from .result import WorkflowResult
from .upload import (
    UploadRequest,
    UploadResponse,
)

__all__ = [
    # Base types
    "BaseApiModel",
    "Outcome",
    "new_external_id",
    "UPLOAD_PATH",
    "WEB_UPLOAD_PATH",
    "BUSINESS_DOCUMENTS_PATH",
    # Upload
    "UploadRequest",
    "UploadResponse",
    # Prediction
    "Coordinates",
    "GeneralValue",
    "Prediction",
    # Workflow
    "WorkflowResult",
]
