"""
Error taxonomy shared by the services and the API layer.
"""


class FrameServiceError(Exception):
    """Base class for errors raised by the frame services"""


class ValidationError(FrameServiceError, ValueError):
    """Missing or malformed required fields (400)"""


class AuthError(FrameServiceError):
    """Missing or incorrect bearer token (401)"""


class NotFoundError(FrameServiceError):
    """Referenced record does not exist"""


class UpstreamWriteError(FrameServiceError):
    """A cache or store call failed; the batch is not considered applied (500)"""

    def __init__(self, stage: str, message: str):
        super().__init__(f"{stage} write failed: {message}")
        self.stage = stage


class WorkerDispatchError(FrameServiceError):
    """The analysis worker did not accept a dispatched file"""
