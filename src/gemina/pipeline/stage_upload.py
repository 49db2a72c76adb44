"""Upload Stage - Submit a document to Gemina for recognition.

Sends the document once. A 202 means the same external id was already
accepted and is treated as success without re-uploading.
"""

from typing import Tuple

from pydantic import ValidationError

from gemina.api import GeminaClient
from gemina.errors import UnexpectedStatusError
from gemina.logging import get_logger
from gemina.models import Outcome, UploadRequest, UploadResponse
from gemina.status import classify_upload

logger = get_logger(__name__)


class DocumentUploader:
    """Uploads a single document and interprets the acknowledgement."""

    def __init__(self, client: GeminaClient):
        self.client = client

    def upload(self, request: UploadRequest) -> Tuple[Outcome, UploadResponse]:
        """Upload a document.

        Args:
            request: File or URL upload request.

        Returns:
            Tuple of the outcome (CREATED or ALREADY_PROCESSING) and the
            parsed acknowledgement.

        Raises:
            UnexpectedStatusError: For any status other than 201 or 202.
        """
        response = self.client.upload(request)
        outcome = classify_upload(response.status_code)

        if outcome == Outcome.FAILED:
            logger.error(
                "Upload rejected",
                external_id=request.external_id,
                status_code=response.status_code,
            )
            raise UnexpectedStatusError(response.status_code, request.endpoint, response.text)

        try:
            ack = UploadResponse.model_validate(response.body)
        except ValidationError as e:
            logger.warning(
                "Upload acknowledgement does not match the expected fields",
                external_id=request.external_id,
                error=str(e),
            )
            ack = UploadResponse()

        if outcome == Outcome.CREATED:
            logger.info("Uploaded successfully", external_id=request.external_id)
        else:
            logger.info(
                "Document is already being processed, not uploading again",
                external_id=request.external_id,
            )

        return outcome, ack
