import logging
from contextlib import contextmanager

from google.api_core.exceptions import GoogleAPICallError

logger = logging.getLogger(__name__)


class PostServiceError(Exception):
    """Base class for failures that map onto an HTTP status code"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PostServiceError):
    status_code = 400


class BadRequest(PostServiceError):
    status_code = 400


class Unauthorized(PostServiceError):
    status_code = 401


class NotFound(PostServiceError):
    status_code = 404


class ServerError(PostServiceError):
    status_code = 500

    def __init__(self, message: str = "Server Error"):
        super().__init__(message)


@contextmanager
def data_access(action: str):
    """Turn Firestore faults into a ServerError, leaving domain errors untouched"""
    try:
        yield
    except GoogleAPICallError:
        logger.exception("Firestore error while %s", action)
        raise ServerError()
