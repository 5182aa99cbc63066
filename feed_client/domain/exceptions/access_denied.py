"""
AccessDeniedError - Raised when the current account does not own the message
it tries to change. Advisory: the server is still the final authority.
"""


class AccessDeniedError(Exception):
    """Raised when the client-side ownership check fails"""

    def __init__(self, message: str = "You can only change your own messages"):
        super().__init__(message)
