"""SMP Managers — explicit construction of all collaborators at startup.

Invariants:
    - Construction order: identifier factory, user manager, service group
      manager, business card manager (service groups before anything keyed by them)
    - business_card_mgr is None when directory integration is disabled
    - Any failing step raises InitializationError naming the step

Design Decisions:
    - Frozen dataclass owned by the application (app.state), not a global
      singleton: tests build their own instance against an in-memory database
"""

import logging
from dataclasses import dataclass

from smp_directory.config import Settings
from smp_directory.core.errors import InitializationError
from smp_directory.core.identifier_factory import (
    SimpleIdentifierFactory, create_identifier_factory,
)
from smp_directory.infrastructure.database import DatabaseSessionManager
from smp_directory.services.business_card_manager import SQLBusinessCardManager
from smp_directory.services.service_group_manager import SQLServiceGroupManager
from smp_directory.services.user_manager import SQLUserManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SMPManagers:
    """All collaborators of the REST APIs, with application lifetime."""
    identifier_factory: SimpleIdentifierFactory
    user_mgr: SQLUserManager
    service_group_mgr: SQLServiceGroupManager
    business_card_mgr: SQLBusinessCardManager | None

    @property
    def business_card_enabled(self) -> bool:
        return self.business_card_mgr is not None


def create_smp_managers(
    db: DatabaseSessionManager | None, settings: Settings,
) -> SMPManagers:
    """Build every manager in dependency order or fail with a descriptive error."""
    if db is None:
        raise InitializationError("Failed to init SMP managers: database not initialized")

    try:
        identifier_factory = create_identifier_factory(settings.identifier_type)
    except ValueError as e:
        raise InitializationError(
            f"Failed to create identifier factory for type '{settings.identifier_type}'",
        ) from e

    user_mgr = SQLUserManager(db)
    # Service group manager must be created before the business card manager
    service_group_mgr = SQLServiceGroupManager(db)
    business_card_mgr = (
        SQLBusinessCardManager(db) if settings.directory_integration_enabled else None
    )

    managers = SMPManagers(
        identifier_factory=identifier_factory,
        user_mgr=user_mgr,
        service_group_mgr=service_group_mgr,
        business_card_mgr=business_card_mgr,
    )
    logger.info(
        f"SMP managers initialized (identifiers={identifier_factory.identifier_type.value},"
        f" business cards={'enabled' if managers.business_card_enabled else 'disabled'})",
    )
    return managers


async def ensure_bootstrap_user(managers: SMPManagers, settings: Settings) -> None:
    """Create the configured initial user if it does not exist yet."""
    if not settings.bootstrap_user_name or not settings.bootstrap_user_password:
        return
    if await managers.user_mgr.get_user_of_name(settings.bootstrap_user_name):
        return
    await managers.user_mgr.create_user(
        settings.bootstrap_user_name, settings.bootstrap_user_password,
    )
    logger.info(
        f"Bootstrap user '{settings.bootstrap_user_name}' created",
        extra={"user_name": settings.bootstrap_user_name},
    )
