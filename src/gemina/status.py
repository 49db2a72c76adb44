"""Status-code classification for Gemina endpoints.

Pure functions with no HTTP dependency, so the control flow of the
upload-then-poll workflow can be reasoned about and tested in isolation.
"""

from gemina.models import Outcome

UPLOAD_OUTCOMES = {
    201: Outcome.CREATED,
    202: Outcome.ALREADY_PROCESSING,
}

POLL_OUTCOMES = {
    200: Outcome.READY,
    202: Outcome.PENDING,
    404: Outcome.NOT_FOUND_YET,
}


def classify_upload(status_code: int) -> Outcome:
    """Map an upload response status to an outcome.

    Args:
        status_code: HTTP status returned by an upload endpoint.

    Returns:
        CREATED, ALREADY_PROCESSING, or FAILED for any other code.
    """
    return UPLOAD_OUTCOMES.get(status_code, Outcome.FAILED)


def classify_poll(status_code: int) -> Outcome:
    """Map a business-document response status to an outcome.

    Args:
        status_code: HTTP status returned by the retrieval endpoint.

    Returns:
        READY, PENDING, NOT_FOUND_YET, or FAILED for any other code.
    """
    return POLL_OUTCOMES.get(status_code, Outcome.FAILED)


def should_retry(outcome: Outcome) -> bool:
    """Whether a poll outcome calls for another attempt."""
    return outcome in (Outcome.PENDING, Outcome.NOT_FOUND_YET)
