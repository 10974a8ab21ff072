"""Service Group Routes — PUT/GET/DELETE /api/v1/servicegroup/{service_group_id}."""

from fastapi import APIRouter, Body, Depends, status

from smp_directory.api.dependencies import get_credentials, get_service_group_api
from smp_directory.core.domain_types import BasicAuthCredentials
from smp_directory.schemas.business_card import OperationResponse
from smp_directory.schemas.service_group import ServiceGroupCreate, ServiceGroupResponse
from smp_directory.services.service_group_api import ServiceGroupServerAPI

router = APIRouter(prefix="/api/v1/servicegroup", tags=["servicegroup"])


@router.get("/{service_group_id}", response_model=ServiceGroupResponse)
async def get_service_group(
    service_group_id: str,
    api: ServiceGroupServerAPI = Depends(get_service_group_api),
):
    service_group = await api.get_service_group(service_group_id)
    return ServiceGroupResponse.from_service_group(service_group)


@router.put(
    "/{service_group_id}", response_model=ServiceGroupResponse,
    status_code=status.HTTP_201_CREATED,
)
async def put_service_group(
    service_group_id: str,
    body: ServiceGroupCreate | None = Body(None),
    credentials: BasicAuthCredentials | None = Depends(get_credentials),
    api: ServiceGroupServerAPI = Depends(get_service_group_api),
):
    """Register a service group owned by the authenticated user."""
    service_group = await api.create_service_group(
        service_group_id, credentials, body.extension if body else None,
    )
    return ServiceGroupResponse.from_service_group(service_group)


@router.delete("/{service_group_id}", response_model=OperationResponse)
async def delete_service_group(
    service_group_id: str,
    credentials: BasicAuthCredentials | None = Depends(get_credentials),
    api: ServiceGroupServerAPI = Depends(get_service_group_api),
):
    """Delete a service group and its business card (owner only)."""
    result = await api.delete_service_group(service_group_id, credentials)
    return OperationResponse(status=result.value)
