import logging
import uuid
from decimal import Decimal
from typing import List, Optional, Tuple

from bizhub.ledger.mirror import TransactionMirror
from bizhub.models.sale import Sale, SalesTransactionSummary
from bizhub.repositories.sale import SaleRepository, TransactionRepository
from bizhub.schemas import SaleCreate
from bizhub.tenancy import validate_tenant_id

logger = logging.getLogger(__name__)


class SaleService:
    def __init__(self, sales: SaleRepository, transactions: TransactionRepository,
                 mirror: TransactionMirror):
        self.sales = sales
        self.transactions = transactions
        self.mirror = mirror

    async def create(self, tenant_id: str, data: SaleCreate) -> Tuple[Sale, Optional[SalesTransactionSummary]]:
        """
        Persist the sale, then mirror it into the transactions table.
        The sale result does not depend on the mirror write.
        """
        tenant_id = validate_tenant_id(tenant_id)
        total = data.total_amount
        if total is None:
            total = sum((item.quantity * item.unit_price for item in data.items), Decimal("0"))

        suffix = uuid.uuid4().hex[:8].upper()
        sale = Sale(
            tenant_id=tenant_id,
            sale_id=data.sale_id or f"SALE-{suffix}",
            invoice_number=data.invoice_number or f"INV-{suffix}",
            total_amount=total,
            payment_status=data.payment_status,
            counterparty_name=data.counterparty_name,
            party_id=data.party_id,
            items=data.items,
        )
        await self.sales.create(sale)
        logger.info(f"Created sale {sale.sale_id} for {tenant_id}")

        summary = await self.mirror.mirror(sale)
        return sale, summary

    async def list(self, tenant_id: str, skip: int = 0, limit: int = 100) -> List[Sale]:
        return await self.sales.list(validate_tenant_id(tenant_id), skip=skip, limit=limit)

    async def list_transactions(self, tenant_id: str, skip: int = 0,
                                limit: int = 100) -> List[SalesTransactionSummary]:
        return await self.transactions.list(validate_tenant_id(tenant_id), skip=skip, limit=limit)
