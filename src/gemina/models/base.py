"""Base models and common types for the Gemina invoice client."""

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel


UPLOAD_PATH = "/uploads"
WEB_UPLOAD_PATH = "/uploads/web"
BUSINESS_DOCUMENTS_PATH = "/business_documents"


class Outcome(str, Enum):
    """Named result of a single upload or poll request."""

    CREATED = "created"  # 201 on upload
    ALREADY_PROCESSING = "already_processing"  # 202 on upload
    READY = "ready"  # 200 on poll
    PENDING = "pending"  # 202 on poll
    NOT_FOUND_YET = "not_found_yet"  # 404 on poll
    FAILED = "failed"  # anything else


def new_external_id() -> str:
    """Generate a fresh document identifier."""
    return str(uuid4())


class BaseApiModel(BaseModel):
    """Base class for API payloads.

    Unknown keys sent by the server are kept so nothing from the
    response body is silently lost.
    """

    class Config:
        extra = "allow"
