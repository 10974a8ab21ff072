"""Business Card Routes — GET/PUT/DELETE /api/v1/businesscard/{service_group_id}.

Invariants:
    - Routes never contain business logic (delegate to BusinessCardServerAPI)
    - PUT and DELETE take HTTP Basic credentials
    - OperationResult.FAILURE maps to 500 STORE_FAILURE
"""

from fastapi import APIRouter, Depends

from smp_directory.api.dependencies import get_business_card_api, get_credentials
from smp_directory.core.domain_types import BasicAuthCredentials, BusinessCardOperation
from smp_directory.core.errors import ErrorContext, StoreFailureError
from smp_directory.schemas.business_card import BusinessCardPayload, OperationResponse
from smp_directory.services.business_card_api import BusinessCardServerAPI

router = APIRouter(prefix="/api/v1/businesscard", tags=["businesscard"])


@router.get("/{service_group_id}", response_model=BusinessCardPayload)
async def get_business_card(
    service_group_id: str,
    api: BusinessCardServerAPI = Depends(get_business_card_api),
):
    """Public read of the business card of a service group."""
    return await api.get_business_card(service_group_id)


@router.put("/{service_group_id}", response_model=OperationResponse)
async def put_business_card(
    service_group_id: str,
    body: BusinessCardPayload,
    credentials: BasicAuthCredentials | None = Depends(get_credentials),
    api: BusinessCardServerAPI = Depends(get_business_card_api),
):
    """Create or fully replace the business card (owner only)."""
    result = await api.create_business_card(service_group_id, body, credentials)
    if result.is_failure:
        raise StoreFailureError(
            BusinessCardOperation.CREATE.value,
            ErrorContext(
                operation=BusinessCardOperation.CREATE.value,
                service_group_id=service_group_id,
            ),
        )
    return OperationResponse(status=result.value)


@router.delete("/{service_group_id}", response_model=OperationResponse)
async def delete_business_card(
    service_group_id: str,
    credentials: BasicAuthCredentials | None = Depends(get_credentials),
    api: BusinessCardServerAPI = Depends(get_business_card_api),
):
    """Delete the business card (owner only)."""
    result = await api.delete_business_card(service_group_id, credentials)
    return OperationResponse(status=result.value)
