"""
DOMAIN SERVICES - Pure decisions with no I/O
"""

from feed_client.domain.services.ownership import can_mutate
from feed_client.domain.services.text_rules import validate_message_text

__all__ = [
    "can_mutate",
    "validate_message_text",
]
