"""Route Dependencies — per-request API objects built from application-lifetime managers.

Invariants:
    - SMPManagers come from app.state (set in the lifespan), never from a global
    - HTTP Basic is parsed without auto_error: missing credentials reach the
      API object, which checks them in its own order
"""

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from smp_directory.core.domain_types import BasicAuthCredentials
from smp_directory.core.errors import InitializationError
from smp_directory.services.business_card_api import BusinessCardServerAPI
from smp_directory.services.service_group_api import ServiceGroupServerAPI
from smp_directory.services.smp_managers import SMPManagers

basic_auth = HTTPBasic(auto_error=False)


def get_smp_managers(request: Request) -> SMPManagers:
    managers = getattr(request.app.state, "smp_managers", None)
    if managers is None:
        raise InitializationError("SMP managers are not initialized")
    return managers


def get_credentials(
    credentials: HTTPBasicCredentials | None = Depends(basic_auth),
) -> BasicAuthCredentials | None:
    if credentials is None:
        return None
    return BasicAuthCredentials(
        user_name=credentials.username, password=credentials.password,
    )


def get_business_card_api(
    request: Request, managers: SMPManagers = Depends(get_smp_managers),
) -> BusinessCardServerAPI:
    return BusinessCardServerAPI(
        identifier_factory=managers.identifier_factory,
        service_group_mgr=managers.service_group_mgr,
        credential_validator=managers.user_mgr,
        ownership_guard=managers.user_mgr,
        business_card_mgr=managers.business_card_mgr,
        current_uri=str(request.url),
    )


def get_service_group_api(
    request: Request, managers: SMPManagers = Depends(get_smp_managers),
) -> ServiceGroupServerAPI:
    return ServiceGroupServerAPI(managers, current_uri=str(request.url))
