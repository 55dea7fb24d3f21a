"""
User repository: user-specific queries on top of the generic Repository
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from .db.manager import Repository
from .models import User


class UserRepository(Repository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, User)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find user by email, with every column loaded"""
        return await self.find_one({"email": email})

    async def email_taken(self, email: str) -> bool:
        return await self.count({"email": email}) > 0
