"""
Entity Mapper - Wire payloads ←→ domain entities.

Two backend revisions are in the wild and disagree on field names:

    current:  {"messageId": 5, "postedBy": 9, "messageText": "hi", "timePostedEpoch": 1700000000000}
    legacy:   {"id": 5, "accountId": 9, "messageText": "hi"}

Inbound payloads of either shape map to the same Message. Outbound payloads
follow the contract selected in Config.FEED_BACKEND_CONTRACT, and so does the
text length limit. Call sites never look at raw keys; they go through this
mapper.

A payload without an identity or owner is rejected with MalformedEntityError.
It is never defaulted to 0.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic import ValidationError

from feed_client.domain.entities.account import Account
from feed_client.domain.entities.message import Message
from feed_client.domain.exceptions.malformed_entity import MalformedEntityError
from feed_client.domain.value_objects.account_id import AccountId
from feed_client.domain.value_objects.message_id import MessageId

logger = logging.getLogger(__name__)


class BackendContract(str, Enum):
    CURRENT = "current"
    LEGACY = "legacy"

    @property
    def max_text_length(self) -> int:
        if self is BackendContract.LEGACY:
            return 500
        return 255

    @classmethod
    def from_name(cls, name: str) -> BackendContract:
        try:
            return cls(name.strip().lower())
        except ValueError:
            valid = [c.value for c in cls]
            raise ValueError(
                f"Unknown backend contract: {name!r}. Must be one of {valid}."
            ) from None


# ==================== INBOUND MODELS ====================


class MessagePayload(BaseModel):
    """A message as returned by either backend revision."""

    model_config = ConfigDict(extra="ignore")

    message_id: StrictInt = Field(validation_alias=AliasChoices("messageId", "id"))
    owner_id: StrictInt = Field(validation_alias=AliasChoices("postedBy", "accountId"))
    text: StrictStr = Field(validation_alias=AliasChoices("messageText", "text"))
    posted_at_epoch_ms: Optional[StrictInt] = Field(
        default=None,
        validation_alias=AliasChoices("timePostedEpoch", "postedAtEpochMillis"),
    )


class AccountPayload(BaseModel):
    """An account as returned by /register and /login (password is dropped)."""

    model_config = ConfigDict(extra="ignore")

    account_id: StrictInt = Field(validation_alias=AliasChoices("accountId", "id"))
    username: StrictStr


# ==================== OUTBOUND MODELS ====================


class CurrentCreateMessageRequest(BaseModel):
    messageText: str
    postedBy: int


class LegacyCreateMessageRequest(BaseModel):
    messageText: str
    accountId: int


class UpdateMessageRequest(BaseModel):
    messageText: str


class CredentialsRequest(BaseModel):
    username: str
    password: str


class EntityMapper:
    """
    Translates between wire JSON and the canonical Message/Account.

    One instance per process, configured with the active BackendContract.
    """

    def __init__(self, contract: BackendContract = BackendContract.CURRENT):
        self._contract = contract

    @property
    def contract(self) -> BackendContract:
        return self._contract

    @property
    def max_text_length(self) -> int:
        return self._contract.max_text_length

    def to_message(self, raw: Any) -> Message:
        """
        Map one wire payload to a Message.

        Raises:
            MalformedEntityError: If the payload is not an object, lacks an
                identity/owner/text field, or carries values of the wrong type
        """
        if not isinstance(raw, dict):
            raise MalformedEntityError(
                f"Expected a message object, got {type(raw).__name__}", payload=raw
            )
        try:
            payload = MessagePayload.model_validate(raw)
            return Message(
                id=MessageId(payload.message_id),
                owner_id=AccountId(payload.owner_id),
                text=payload.text,
                posted_at_epoch_ms=payload.posted_at_epoch_ms,
            )
        except (ValidationError, ValueError) as e:
            logger.warning(f"[EntityMapper] Rejected message payload: {e}")
            raise MalformedEntityError(
                f"Message payload failed mapping: {e}", payload=raw
            ) from e

    def to_messages(self, raw: Any) -> list[Message]:
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise MalformedEntityError(
                f"Expected a list of messages, got {type(raw).__name__}", payload=raw
            )
        return [self.to_message(item) for item in raw]

    def to_account(self, raw: Any) -> Account:
        if not isinstance(raw, dict):
            raise MalformedEntityError(
                f"Expected an account object, got {type(raw).__name__}", payload=raw
            )
        try:
            payload = AccountPayload.model_validate(raw)
            return Account(id=AccountId(payload.account_id), username=payload.username)
        except (ValidationError, ValueError) as e:
            logger.warning(f"[EntityMapper] Rejected account payload: {e}")
            raise MalformedEntityError(
                f"Account payload failed mapping: {e}", payload=None
            ) from e

    def create_payload(self, text: str, owner_id: AccountId) -> dict[str, Any]:
        if self._contract is BackendContract.LEGACY:
            request = LegacyCreateMessageRequest(messageText=text, accountId=owner_id.value)
        else:
            request = CurrentCreateMessageRequest(messageText=text, postedBy=owner_id.value)
        return request.model_dump()

    def update_payload(self, text: str) -> dict[str, Any]:
        return UpdateMessageRequest(messageText=text).model_dump()

    def credentials_payload(self, username: str, password: str) -> dict[str, Any]:
        return CredentialsRequest(username=username, password=password).model_dump()
