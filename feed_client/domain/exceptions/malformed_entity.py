"""
MalformedEntityError - A response body could not be mapped to a Message or
Account (missing id/owner, wrong types, unparseable body).
"""


class MalformedEntityError(Exception):
    """Exception raised when a server payload fails mapping."""

    def __init__(self, message: str, payload: object = None):
        super().__init__(message)
        self.message = message
        self.payload = payload
