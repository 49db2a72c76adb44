"""Upload request and acknowledgement models."""

import base64
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, model_validator

from .base import UPLOAD_PATH, WEB_UPLOAD_PATH, BaseApiModel, new_external_id


class UploadRequest(BaseModel):
    """
    Body of an upload call.

    Carries exactly one document source: either the file contents inline
    as base64, or a URL the server downloads itself.
    """

    external_id: str = Field(default_factory=new_external_id)
    client_id: str = Field(..., min_length=1)
    use_llm: Optional[bool] = None
    file: Optional[str] = Field(None, description="Base64-encoded document bytes")
    url: Optional[str] = Field(None, description="Remote document URL")

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "UploadRequest":
        if (self.file is None) == (self.url is None):
            raise ValueError("Exactly one of 'file' or 'url' must be provided")
        return self

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        client_id: str,
        external_id: Optional[str] = None,
        use_llm: Optional[bool] = None,
    ) -> "UploadRequest":
        """Build a request from a local document.

        Args:
            path: Path to the image or PDF to upload.
            client_id: Caller identifier issued by Gemina.
            external_id: Document identifier; generated when omitted.
            use_llm: Optional LLM-assisted extraction flag.

        Returns:
            UploadRequest with the file contents inlined.

        Raises:
            FileNotFoundError: If the path does not point to a file.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        encoded = base64.b64encode(path.read_bytes()).decode("ascii")
        return cls(
            external_id=external_id or new_external_id(),
            client_id=client_id,
            use_llm=use_llm,
            file=encoded,
        )

    @classmethod
    def from_url(
        cls,
        url: str,
        client_id: str,
        external_id: Optional[str] = None,
        use_llm: Optional[bool] = None,
    ) -> "UploadRequest":
        """Build a web upload request for a remotely hosted document."""
        return cls(
            external_id=external_id or new_external_id(),
            client_id=client_id,
            use_llm=use_llm,
            url=url,
        )

    @property
    def is_web_upload(self) -> bool:
        return self.url is not None

    @property
    def endpoint(self) -> str:
        """API path this request is posted to."""
        return WEB_UPLOAD_PATH if self.is_web_upload else UPLOAD_PATH

    def to_payload(self) -> dict[str, Any]:
        """JSON body as sent on the wire."""
        return self.model_dump(exclude_none=True)


class UploadResponse(BaseApiModel):
    """Acknowledgement returned by an upload call.

    Does not contain the prediction itself.
    """

    timestamp: Optional[Union[float, str]] = None
    created: Optional[Union[datetime, str]] = Field(None, union_mode="left_to_right")
    external_id: Optional[str] = None
