"""Message text rules shared by create and update."""

from feed_client.domain.exceptions.invalid_input import InvalidInputError


def validate_message_text(text: str, max_length: int) -> str:
    """
    Validate message text against the active backend limit.

    Args:
        text: Raw text from the caller
        max_length: Limit declared by the active backend contract

    Returns:
        The text with surrounding whitespace removed

    Raises:
        InvalidInputError: If the text is empty or longer than max_length
    """
    if not isinstance(text, str):
        raise InvalidInputError("Message text must be a string")
    cleaned = text.strip()
    if not cleaned:
        raise InvalidInputError("Message cannot be empty")
    if len(cleaned) > max_length:
        raise InvalidInputError(
            f"Message cannot be longer than {max_length} characters"
        )
    return cleaned
