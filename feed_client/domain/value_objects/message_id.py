"""
MessageId Value Object - Server-assigned integer identity of a post.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MessageId:
    value: int  # messageId (current backend) or id (legacy backend)

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"Message ID must be an integer, got {self.value!r}")
        if self.value <= 0:
            raise ValueError(f"Message ID must be positive, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)
