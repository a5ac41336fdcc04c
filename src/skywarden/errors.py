class SkywardenError(Exception):
    """Base class for all lifecycle guardian errors."""


class MetadataError(SkywardenError):
    def __init__(self, key: str, message: str):
        super().__init__(f"metadata {key}: {message}")
        self.key = key


class MetadataUnavailable(MetadataError):
    """The metadata server could not be reached (transport error or timeout)."""


class MetadataNotOK(MetadataError):
    """The metadata server answered with a non-200 status."""

    def __init__(self, key: str, status_code: int):
        super().__init__(key, f"returned {status_code}")
        self.status_code = status_code


class TerminationError(SkywardenError):
    """The delete-instance request failed."""


class StartupError(SkywardenError):
    """A required identity fact could not be obtained at startup."""

    def __init__(self, key: str, cause: Exception):
        super().__init__(f"Failed to get {key}: {cause}")
        self.key = key
        self.cause = cause
