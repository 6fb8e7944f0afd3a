"""
Infrastructure Layer - Password hashing.
"""

from typing import Optional
import asyncio

from passlib.context import CryptContext

from ..application.ports import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """
    bcrypt implementation of PasswordHasher.

    Hashing is CPU bound, so both operations run in the default thread
    pool to keep the event loop responsive.

    Args:
        rounds: bcrypt cost factor; passlib's default when omitted
    """

    def __init__(self, rounds: Optional[int] = None):
        options = {"bcrypt__rounds": rounds} if rounds else {}
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", **options)

    async def hash(self, password: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.context.hash, password)

    async def verify(self, password: str, hashed: str) -> bool:
        """Check a password against a stored hash; a malformed hash raises."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.context.verify, password, hashed)
