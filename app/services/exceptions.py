class RemoteServiceError(Exception):
    """Raised when a collaborating API call fails or returns an unusable payload."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

class PayApiError(RemoteServiceError):
    pass

class BarApiError(RemoteServiceError):
    pass
