import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from bizhub.ledger.mirror import TransactionMirror, PLACEHOLDER_ITEM_NAME
from bizhub.models.sale import Sale

TENANT = "9876543210"

def test_summary_uses_first_line_item(mirror, sample_sale):
    summary = mirror.build_summary(sample_sale)

    assert summary.type == "sale"
    assert summary.tenant_id == TENANT
    assert summary.total_price == Decimal("250")
    assert summary.payment_status == "paid"
    assert summary.counterparty_name == "Walk-in Buyer"
    assert summary.item_name == "Rice 5kg"
    assert summary.quantity == Decimal("2")
    assert summary.summary_id.startswith("TXN-")
    assert summary.summary_id != sample_sale.sale_id

def test_summary_placeholders_for_empty_sale(mirror):
    sale = Sale(tenant_id=TENANT, sale_id="SALE-2", total_amount=Decimal("250"),
                counterparty_name=None, items=[])

    summary = mirror.build_summary(sale)

    assert summary.item_name == PLACEHOLDER_ITEM_NAME == "Sale Item"
    assert summary.quantity == 1
    assert summary.counterparty_name == "Customer"
    assert summary.total_price == Decimal("250")
    assert summary.payment_status == "unpaid"

@pytest.mark.asyncio
async def test_mirror_writes_one_row(mirror, transactions, sample_sale):
    summary = await mirror.mirror(sample_sale)

    assert summary is not None
    assert len(transactions.rows) == 1
    assert await transactions.get(TENANT, summary.summary_id) is not None

@pytest.mark.asyncio
async def test_mirror_failure_is_swallowed(sample_sale):
    transactions = MagicMock()
    transactions.create = AsyncMock(side_effect=ConnectionError("store unreachable"))
    mirror = TransactionMirror(transactions)

    assert await mirror.mirror(sample_sale) is None
    # Attempted exactly once, never retried
    transactions.create.assert_awaited_once()

@pytest.mark.asyncio
async def test_disabled_mirror_writes_nothing(sample_sale):
    transactions = MagicMock()
    transactions.create = AsyncMock()
    mirror = TransactionMirror(transactions, enabled=False)

    assert await mirror.mirror(sample_sale) is None
    transactions.create.assert_not_called()
