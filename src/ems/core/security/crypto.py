"""Password hashing with Argon2id."""

import asyncio

import argon2

from src.ems.core.config import Settings


class PasswordHasher:
    """Argon2id hashing with a tunable work factor.

    The async variants run the deliberately slow hash in a worker thread so a
    signup or login never stalls unrelated requests on the event loop.
    """

    def __init__(self, time_cost: int = 3, memory_cost: int = 65536, parallelism: int = 1):
        self._hasher = argon2.PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordHasher":
        return cls(
            time_cost=settings.argon2_time_cost,
            memory_cost=settings.argon2_memory_cost,
            parallelism=settings.argon2_parallelism,
        )

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        """Verify password against hash. Returns False on any mismatch or bad hash."""
        try:
            return self._hasher.verify(hashed, password)
        except argon2.exceptions.VerificationError:
            return False
        except argon2.exceptions.InvalidHashError:
            return False

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, hashed: str) -> bool:
        return await asyncio.to_thread(self.verify, password, hashed)
