from typing import List, Optional

from fastapi import APIRouter, Depends

from bizhub.api.deps import get_document_service, http_error
from bizhub.errors import LedgerError
from bizhub.models.document import FinancialDocument
from bizhub.schemas import DeleteResponse, DocumentCreate, DocumentResponse, DocumentUpdate
from bizhub.services.documents import DocumentService
from bizhub.tenancy import get_tenant

router = APIRouter(prefix="/api/documents", tags=["Documents"])

@router.post("/", response_model=DocumentResponse, status_code=201)
async def create_document(
    data: DocumentCreate,
    tenant_id: str = Depends(get_tenant),
    service: DocumentService = Depends(get_document_service)
):
    try:
        document, ledger = await service.create(tenant_id, data)
    except LedgerError as e:
        raise http_error(e)
    return DocumentResponse(document=document, ledger=ledger)

@router.get("/", response_model=List[FinancialDocument])
async def list_documents(
    kind: Optional[str] = None,
    status: Optional[str] = None,
    party_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    tenant_id: str = Depends(get_tenant),
    service: DocumentService = Depends(get_document_service)
):
    try:
        return await service.list(tenant_id, kind=kind, status=status, party_id=party_id,
                                  skip=skip, limit=limit)
    except LedgerError as e:
        raise http_error(e)

@router.get("/{document_id}", response_model=FinancialDocument)
async def get_document(
    document_id: str,
    tenant_id: str = Depends(get_tenant),
    service: DocumentService = Depends(get_document_service)
):
    try:
        return await service.get(tenant_id, document_id)
    except LedgerError as e:
        raise http_error(e)

@router.patch("/{document_id}", response_model=DocumentResponse)
async def update_document(
    document_id: str,
    data: DocumentUpdate,
    tenant_id: str = Depends(get_tenant),
    service: DocumentService = Depends(get_document_service)
):
    try:
        document, ledger = await service.update(tenant_id, document_id, data)
    except LedgerError as e:
        raise http_error(e)
    return DocumentResponse(document=document, ledger=ledger)

@router.delete("/{document_id}", response_model=DeleteResponse)
async def delete_document(
    document_id: str,
    tenant_id: str = Depends(get_tenant),
    service: DocumentService = Depends(get_document_service)
):
    try:
        ledger = await service.delete(tenant_id, document_id)
    except LedgerError as e:
        raise http_error(e)
    return DeleteResponse(document_id=document_id, ledger=ledger)
