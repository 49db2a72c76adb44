"""HTTP client for the Gemina invoice recognition API.

Thin transport layer over three endpoints:

- POST /uploads                          (document inlined as base64)
- POST /uploads/web                      (document fetched by the server)
- GET  /business_documents/{external_id} (prediction retrieval)

The client only performs requests and decodes bodies. Deciding which status
codes are acceptable is left to the pipeline stages (see gemina.status).

Example usage:

    from gemina.api import GeminaClient
    from gemina.config import Settings
    from gemina.models import UploadRequest

    settings = Settings()
    with GeminaClient(settings) as client:
        request = UploadRequest.from_file("invoice.png", client_id=settings.client_id)
        ack = client.upload(request)
        prediction = client.get_prediction(request.external_id)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from gemina.config import Settings
from gemina.errors import ResponseParseError, TransportError
from gemina.logging import get_logger
from gemina.models import BUSINESS_DOCUMENTS_PATH, Outcome, UploadRequest
from gemina.status import classify_upload

logger = get_logger(__name__)


@dataclass
class ApiResponse:
    """Decoded response: the JSON body plus the transport status code."""

    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)
    text: str = ""

    @classmethod
    def from_httpx(cls, response: httpx.Response, strict: bool = True) -> "ApiResponse":
        """Decode an httpx response.

        - strict: When True, a non-empty body that is not a JSON object raises
          ResponseParseError. When False it decodes to an empty mapping, which
          suits status codes whose body is never read.
        """
        text = response.text
        body: Dict[str, Any] = {}
        if text.strip():
            try:
                decoded = response.json()
            except ValueError as e:
                if strict:
                    raise ResponseParseError(
                        f"Invalid JSON from {response.request.url} (status {response.status_code})"
                    ) from e
                decoded = {}
            if isinstance(decoded, dict):
                body = decoded
            elif strict:
                raise ResponseParseError(
                    f"Expected a JSON object from {response.request.url}, got {type(decoded).__name__}"
                )
        return cls(status_code=response.status_code, body=body, text=text)


class GeminaClient:
    """Client for the Gemina REST API.

    Owns an httpx.Client unless one is supplied, in which case the caller
    remains responsible for closing it.
    """

    def __init__(self, settings: Settings, http: Optional[httpx.Client] = None) -> None:
        settings.require_credentials()

        self.settings = settings
        self._owns_http = http is None
        self._http = http or httpx.Client(timeout=settings.request_timeout_seconds)

    def __enter__(self) -> "GeminaClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the connection pool if this client created it."""
        if self._owns_http:
            self._http.close()

    def _headers(self, json_body: bool = False) -> Dict[str, str]:
        # Literal "Basic <key>"; the key is sent as-is, not base64 credentials
        headers = {
            "Accept": "application/json",
            "Authorization": f"Basic {self.settings.api_key.get_secret_value()}",
        }
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _send(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> httpx.Response:
        url = self.settings.endpoint_url(path)
        try:
            return self._http.request(
                method,
                url,
                json=payload,
                headers=self._headers(json_body=payload is not None),
            )
        except httpx.HTTPError as e:
            logger.error("Request failed", method=method, url=url, error=str(e))
            raise TransportError(f"{method} {url} failed: {e}") from e

    def upload(self, request: UploadRequest) -> ApiResponse:
        """Submit a document for recognition.

        Posts to /uploads or /uploads/web depending on the request's source.
        Returns the acknowledgement whatever the status code.
        """
        logger.info(
            "Uploading document",
            external_id=request.external_id,
            endpoint=request.endpoint,
            use_llm=request.use_llm,
        )
        response = self._send("POST", request.endpoint, payload=request.to_payload())
        # Only 201/202 bodies are read as acknowledgements
        accepted = classify_upload(response.status_code) != Outcome.FAILED
        result = ApiResponse.from_httpx(response, strict=accepted)
        logger.debug("Upload response", status_code=result.status_code, body=result.body)
        return result

    def get_prediction(self, external_id: str) -> ApiResponse:
        """Fetch the prediction for a previously uploaded document."""
        if not external_id:
            raise ValueError("external_id is required")
        response = self._send("GET", f"{BUSINESS_DOCUMENTS_PATH}/{external_id}")
        # Only a 200 body is ever read as a prediction
        result = ApiResponse.from_httpx(response, strict=response.status_code == 200)
        logger.debug("Prediction response", external_id=external_id, status_code=result.status_code)
        return result
