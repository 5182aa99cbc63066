"""
DOMAIN EXCEPTIONS - Failures surfaced to the caller of the feed client

Raised by the HTTP layer, the feed synchronizer and the handlers.
The presentation layer decides how to show them.

An affected-count of zero is NOT an exception: see MutationResult.
"""

from feed_client.domain.exceptions.unauthenticated import UnauthenticatedError
from feed_client.domain.exceptions.invalid_input import (
    InvalidInputError,
    UsernameTakenError,
)
from feed_client.domain.exceptions.access_denied import AccessDeniedError
from feed_client.domain.exceptions.remote_unavailable import RemoteUnavailableError
from feed_client.domain.exceptions.malformed_entity import MalformedEntityError

__all__ = [
    "UnauthenticatedError",
    "InvalidInputError",
    "UsernameTakenError",
    "AccessDeniedError",
    "RemoteUnavailableError",
    "MalformedEntityError",
]
