"""
RemoteUnavailableError - Network failure or an unexpected HTTP status.
"""

from typing import Optional


class RemoteUnavailableError(Exception):
    """Exception raised when the feed service cannot be reached or misbehaves."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
