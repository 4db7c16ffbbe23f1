"""Password Hasher — bcrypt behind an async interface.

Invariants:
    - hash() output is salted and never equals its input
    - verify_decoy() costs the same as verify() once the decoy hash exists
    - verify() returns False (never raises) for malformed stored hashes
    - bcrypt work runs in a worker thread: the event loop is never blocked

Design Decisions:
    - bcrypt directly over passlib: passlib's bcrypt backend is unmaintained and
      breaks against current bcrypt releases
    - anyio.to_thread over asyncio.to_thread: anyio is already FastAPI's
      concurrency layer
"""

import anyio
import bcrypt


class BcryptPasswordHasher:
    """Salted bcrypt hashing with a fixed work factor."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self._decoy_hash: str | None = None

    async def hash(self, password: str) -> str:
        return await anyio.to_thread.run_sync(self._hash_sync, password)

    async def verify(self, password: str, hashed: str) -> bool:
        return await anyio.to_thread.run_sync(self._verify_sync, password, hashed)

    async def verify_decoy(self, password: str) -> None:
        """Spend one verification against a throwaway hash (unknown-account login)."""
        if self._decoy_hash is None:
            self._decoy_hash = await self.hash("decoy-password-1")
        await self.verify(password, self._decoy_hash)

    def _hash_sync(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def _verify_sync(password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            return False
