from typing import List

from fastapi import APIRouter, Depends

from bizhub.api.deps import get_sale_service, http_error
from bizhub.errors import LedgerError
from bizhub.models.sale import Sale, SalesTransactionSummary
from bizhub.schemas import SaleCreate, SaleResponse
from bizhub.services.sales import SaleService
from bizhub.tenancy import get_tenant

router = APIRouter(prefix="/api", tags=["Sales"])

@router.post("/sales", response_model=SaleResponse, status_code=201)
async def create_sale(
    data: SaleCreate,
    tenant_id: str = Depends(get_tenant),
    service: SaleService = Depends(get_sale_service)
):
    try:
        sale, summary = await service.create(tenant_id, data)
    except LedgerError as e:
        raise http_error(e)
    return SaleResponse(sale=sale, mirrored=summary is not None, summary=summary)

@router.get("/sales", response_model=List[Sale])
async def list_sales(
    skip: int = 0,
    limit: int = 100,
    tenant_id: str = Depends(get_tenant),
    service: SaleService = Depends(get_sale_service)
):
    return await service.list(tenant_id, skip=skip, limit=limit)

@router.get("/transactions", response_model=List[SalesTransactionSummary])
async def list_transactions(
    skip: int = 0,
    limit: int = 100,
    tenant_id: str = Depends(get_tenant),
    service: SaleService = Depends(get_sale_service)
):
    """Dashboard feed of mirrored sales summaries, newest first."""
    return await service.list_transactions(tenant_id, skip=skip, limit=limit)
