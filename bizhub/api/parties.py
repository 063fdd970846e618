from typing import List

from fastapi import APIRouter, Depends

from bizhub.api.deps import get_party_service, http_error
from bizhub.errors import LedgerError
from bizhub.models.party import Party
from bizhub.schemas import PartyCreate
from bizhub.services.parties import PartyService
from bizhub.tenancy import get_tenant

router = APIRouter(prefix="/api/parties", tags=["Parties"])

@router.post("/", response_model=Party, status_code=201)
async def register_party(
    data: PartyCreate,
    tenant_id: str = Depends(get_tenant),
    service: PartyService = Depends(get_party_service)
):
    try:
        return await service.register(tenant_id, data)
    except LedgerError as e:
        raise http_error(e)

@router.get("/", response_model=List[Party])
async def list_parties(
    skip: int = 0,
    limit: int = 100,
    tenant_id: str = Depends(get_tenant),
    service: PartyService = Depends(get_party_service)
):
    return await service.list(tenant_id, skip=skip, limit=limit)

@router.get("/{party_id}", response_model=Party)
async def get_party(
    party_id: str,
    tenant_id: str = Depends(get_tenant),
    service: PartyService = Depends(get_party_service)
):
    try:
        return await service.get(tenant_id, party_id)
    except LedgerError as e:
        raise http_error(e)

@router.delete("/{party_id}")
async def delete_party(
    party_id: str,
    tenant_id: str = Depends(get_tenant),
    service: PartyService = Depends(get_party_service)
):
    try:
        await service.delete(tenant_id, party_id)
    except LedgerError as e:
        raise http_error(e)
    return {"party_id": party_id, "deleted": True}

@router.post("/{party_id}/recompute", response_model=Party)
async def recompute_party_balance(
    party_id: str,
    reset_counter: bool = False,
    tenant_id: str = Depends(get_tenant),
    service: PartyService = Depends(get_party_service)
):
    """Rebuild the party balance from its documents."""
    try:
        return await service.recompute(tenant_id, party_id, reset_counter)
    except LedgerError as e:
        raise http_error(e)
