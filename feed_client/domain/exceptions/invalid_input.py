"""
InvalidInputError - Local validation failure or a server 400.

The backend answers 400 both for bad text and for an unknown message id,
so this error does not claim which of the two happened.
"""


class InvalidInputError(Exception):
    """Exception raised for rejected input."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UsernameTakenError(InvalidInputError):
    """Registration rejected with 409."""

    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username
