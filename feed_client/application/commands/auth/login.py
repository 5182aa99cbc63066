"""
Login Command.

Authenticates against the feed service and stores the returned account in
the session, replacing any account already there.
"""

from dataclasses import dataclass, field
from feed_client.application.commands.auth.credentials import require_credentials
from feed_client.application.common.interfaces import Command, CommandHandler
from feed_client.application.services.session import Session
from feed_client.domain.entities.account import Account
from feed_client.domain.ports.repositories import AccountRepository


@dataclass(frozen=True)
class LoginCommand(Command[Account]):
    username: str
    password: str = field(repr=False)


class LoginHandler(CommandHandler[Account]):
    _account_repository: AccountRepository

    def __init__(self, account_repository: AccountRepository, session: Session):
        self._account_repository = account_repository
        self._session = session

    async def execute(self, command: LoginCommand) -> Account:
        username = require_credentials(command.username, command.password)
        account = await self._account_repository.login(username, command.password)
        self._session.login(account)
        return account
