import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from bizhub.errors import MirrorWriteError
from bizhub.models.sale import Sale, SalesTransactionSummary
from bizhub.repositories.sale import TransactionRepository

logger = logging.getLogger(__name__)

DEFAULT_COUNTERPARTY_NAME = "Customer"
PLACEHOLDER_ITEM_NAME = "Sale Item"
PLACEHOLDER_QUANTITY = Decimal("1")


class TransactionMirror:
    """
    Writes one denormalized summary row per created sale into the
    transactions table so dashboards can read a single collection.
    The write is best-effort: failures are logged and never reach the caller.
    """

    def __init__(self, transactions: TransactionRepository, enabled: bool = True):
        self.transactions = transactions
        self.enabled = enabled

    def build_summary(self, sale: Sale) -> SalesTransactionSummary:
        # Only the first line item is summarised
        first_item = sale.items[0] if sale.items else None

        return SalesTransactionSummary(
            tenant_id=sale.tenant_id,
            summary_id=f"TXN-{uuid.uuid4().hex[:12].upper()}",
            type="sale",
            total_price=sale.total_amount,
            payment_status=sale.payment_status,
            counterparty_name=sale.counterparty_name or DEFAULT_COUNTERPARTY_NAME,
            item_name=(first_item.item_name if first_item else None) or PLACEHOLDER_ITEM_NAME,
            quantity=(first_item.quantity if first_item else None) or PLACEHOLDER_QUANTITY,
            timestamp=datetime.utcnow(),
        )

    async def mirror(self, sale: Sale) -> Optional[SalesTransactionSummary]:
        """Attempt the summary write once. Returns the summary, or None if it was not written."""
        if not self.enabled:
            return None

        try:
            summary = self.build_summary(sale)
            await self.transactions.create(summary)
        except Exception as e:
            err = MirrorWriteError(f"Failed to mirror sale {sale.sale_id}: {e}")
            logger.error(str(err))
            return None

        logger.info(f"Mirrored sale {sale.sale_id} as {summary.summary_id}")
        return summary
