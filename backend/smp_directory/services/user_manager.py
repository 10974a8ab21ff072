"""User Manager — credential validation and service group ownership checks.

Invariants:
    - validate_user_credentials never returns None: it returns a user or raises
    - Missing credentials, unknown user and wrong password all raise UnauthorizedError
    - verify_ownership raises ServiceGroupNotFoundError for an unregistered
      identifier and OwnershipError when the owner differs

Design Decisions:
    - One session per call via DatabaseSessionManager; no session is held
      across collaborator calls
    - Password hashing and verification run in a worker thread
      (asyncio.to_thread), never on the event loop thread
"""

import asyncio
import logging

from sqlalchemy import func, select

from smp_directory.core.domain_types import (
    BasicAuthCredentials, ParticipantIdentifier, SMPUser,
)
from smp_directory.core.errors import (
    OwnershipError, ServiceGroupNotFoundError, UnauthorizedError, UnknownUserError,
)
from smp_directory.core.passwords import hash_password, verify_password
from smp_directory.infrastructure.database import DatabaseSessionManager
from smp_directory.models.service_group import ServiceGroup
from smp_directory.models.user import User

logger = logging.getLogger(__name__)


class SQLUserManager:
    """Credential validator and ownership guard backed by smp_users."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def create_user(self, user_name: str, password: str) -> SMPUser:
        password_hash = await asyncio.to_thread(hash_password, password)
        async with self._db.session() as db:
            user = User(login_name=user_name, password_hash=password_hash)
            db.add(user)
            await db.commit()
            await db.refresh(user)
            logger.info(f"Created user '{user_name}'", extra={"user_name": user_name})
            return user.to_domain()

    async def get_user_of_name(self, user_name: str) -> SMPUser | None:
        async with self._db.session() as db:
            user = await self._find_user(db, user_name)
            return user.to_domain() if user else None

    async def get_user_count(self) -> int:
        async with self._db.session() as db:
            result = await db.execute(select(func.count()).select_from(User))
            return result.scalar_one()

    async def validate_user_credentials(
        self, credentials: BasicAuthCredentials | None,
    ) -> SMPUser:
        if credentials is None:
            raise UnauthorizedError("No credentials provided")
        async with self._db.session() as db:
            user = await self._find_user(db, credentials.user_name)
            if user is None:
                raise UnknownUserError(credentials.user_name)
        # PBKDF2 runs in a worker thread, outside the session
        if not await asyncio.to_thread(
            verify_password, credentials.password, user.password_hash,
        ):
            raise UnauthorizedError(
                f"Illegal password provided for user '{credentials.user_name}'",
            )
        return user.to_domain()

    async def verify_ownership(
        self, identifier: ParticipantIdentifier, user: SMPUser,
    ) -> None:
        async with self._db.session() as db:
            service_group = await db.get(ServiceGroup, str(identifier))
            if service_group is None:
                raise ServiceGroupNotFoundError(str(identifier))
            if str(service_group.owner_id) != user.id:
                raise OwnershipError(user.user_name, str(identifier))
        logger.debug(
            f"Verified service group {identifier} is owned by {user.user_name}",
            extra={"user_name": user.user_name},
        )

    @staticmethod
    async def _find_user(db, user_name: str) -> User | None:
        result = await db.execute(select(User).where(User.login_name == user_name))
        return result.scalar_one_or_none()
