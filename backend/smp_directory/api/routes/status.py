"""SMP Status — configuration summary of this SMP instance.

Invariants:
    - Read-only; reports what the running managers were built with
    - business_card_count is null when directory integration is disabled
"""

from fastapi import APIRouter, Depends

from smp_directory.api.dependencies import get_smp_managers
from smp_directory.config import get_settings
from smp_directory.services.smp_managers import SMPManagers

router = APIRouter(prefix="/api/v1/status", tags=["status"])


@router.get("")
async def get_status(managers: SMPManagers = Depends(get_smp_managers)):
    """SMP id, identifier syntax, directory support and object counts."""
    business_card_count = None
    if managers.business_card_mgr is not None:
        business_card_count = await managers.business_card_mgr.get_business_card_count()
    return {
        "smp_id": get_settings().smp_id,
        "identifier_type": managers.identifier_factory.identifier_type.value,
        "directory_integration_enabled": managers.business_card_enabled,
        "user_count": await managers.user_mgr.get_user_count(),
        "service_group_count": await managers.service_group_mgr.get_service_group_count(),
        "business_card_count": business_card_count,
    }
