"""CredentialStore — per-provider API key behind an asyncio reader/writer lock."""
import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class ReadWriteLock:
    """Many concurrent readers or one writer. Waiting writers block new readers."""

    def __init__(self) -> None:
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writing and self._writers_waiting == 0
            )
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                match self._readers:
                    case 0:
                        self._cond.notify_all()
                    case _:
                        pass

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writing and self._readers == 0
                )
            finally:
                self._writers_waiting -= 1
                # a cancelled writer must release readers it was holding back
                self._cond.notify_all()
            self._writing = True
        try:
            yield
        finally:
            async with self._cond:
                self._writing = False
                self._cond.notify_all()


class CredentialStore:

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._secret: str | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(configured={bool(self._secret)})"

    async def set(self, secret: str) -> None:
        async with self._lock.write():
            self._secret = secret

    async def get_effective(self) -> str | None:
        """Return the secret only when one is set and non-empty."""
        async with self._lock.read():
            match self._secret:
                case str() as s if s:
                    return s
                case _:
                    return None

    async def is_configured(self) -> bool:
        return await self.get_effective() is not None
