"""Exception types raised across the ReThread workflow.

Every message on these exceptions is meant to be shown to the user as-is.
"""

TRANSFORM_FAILED_MESSAGE = "Transformation failed. Please try again."


class RethreadError(Exception):
    """Base class for ReThread errors."""


class ConfigurationError(RethreadError):
    """Required configuration (e.g. the API credential) is missing."""


class IngestError(RethreadError):
    """The uploaded file could not be accepted as a garment image."""


class TransformError(RethreadError):
    """The remote service did not return a usable image.

    Network failures, auth/quota errors, policy rejections and malformed
    responses all collapse into this one error with the same message.
    """

    def __init__(self, message: str = TRANSFORM_FAILED_MESSAGE):
        super().__init__(message)


class UnknownStyleError(RethreadError, ValueError):
    """A style id that is not in the catalog."""

    def __init__(self, style_id: str):
        self.style_id = style_id
        super().__init__(f"Unknown style: {style_id!r}")
