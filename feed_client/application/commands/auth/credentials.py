"""Credential checks shared by login and register."""

from feed_client.domain.exceptions.invalid_input import InvalidInputError


def require_credentials(username: str, password: str) -> str:
    """Return the trimmed username, or raise before any request is sent."""
    cleaned = (username or "").strip()
    if not cleaned:
        raise InvalidInputError("Username is required")
    if not password:
        raise InvalidInputError("Password is required")
    return cleaned
