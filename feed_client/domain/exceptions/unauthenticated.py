"""
UnauthenticatedError - No session for a mutating operation, or the server
answered 401.
"""


class UnauthenticatedError(Exception):
    """Raised when an operation needs a logged-in account"""

    def __init__(self, message: str = "Please log in to continue."):
        super().__init__(message)
