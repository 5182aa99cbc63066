"""
Command/Query base classes for the client operations.

Commands change session or server state (login, create, edit, remove).
Queries only read, either the local feed snapshot or the feed service.
Each facade method builds one of these and runs it through its handler.

Usage:
    @dataclass(frozen=True)
    class CreatePostCommand(Command[Message]):
        text: str

    class CreatePostHandler(CommandHandler[Message]):
        def __init__(self, synchronizer: FeedSynchronizer):
            self._synchronizer = synchronizer

        async def execute(self, command: CreatePostCommand) -> Message:
            return await self._synchronizer.create_and_refresh(command.text)
"""
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

R = TypeVar("R")


class Command(ABC, Generic[R]):
    """Write operation whose handler returns R"""


class CommandHandler(ABC, Generic[R]):
    @abstractmethod
    async def execute(self, command: Command[R]) -> R:
        ...


class Query(ABC, Generic[R]):
    """Read operation whose handler returns R"""


class QueryHandler(ABC, Generic[R]):
    @abstractmethod
    async def execute(self, query: Query[R]) -> R:
        """Run the read. Raises the same domain errors as the commands."""
        ...
