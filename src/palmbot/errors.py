"""Errors raised along the palm reading pipeline.

Every error here is recovered inside the service: the webhook dispatcher turns
them into the fixed "please retake the photo" reply and the /analyze-palm
route maps them to HTTP status codes.
"""


class PalmReadingError(Exception):
    """Base class for pipeline failures."""


class DecodeError(PalmReadingError):
    """The uploaded bytes are not a decodable image."""


class ModelNotLoaded(PalmReadingError):
    """The hand classifier did not load at start-up."""


class ShapeMismatch(PalmReadingError):
    """Tensor or model output does not match the classifier's input contract."""


class UpstreamFailure(PalmReadingError):
    """An external service (LINE, OpenAI) failed or returned an unusable response."""
