from decimal import Decimal
from typing import Dict, Mapping, Optional

from bizhub.models.document import DocumentKind, DocumentStatus

# Balance sign per document kind while active. Purchases are money we owe the
# supplier (negative); returns are money the supplier owes back (positive).
KIND_SIGNS: Dict[DocumentKind, int] = {
    DocumentKind.PURCHASE: -1,
    DocumentKind.PURCHASE_RETURN: 1,
    DocumentKind.EXPENSE: 0,
}


def build_sign_table(expense_sign: Optional[int] = None) -> Dict[DocumentKind, int]:
    """Default sign table, with the expense sign overridden when given."""
    signs = dict(KIND_SIGNS)
    if expense_sign is not None:
        if expense_sign not in (-1, 0, 1):
            raise ValueError(f"expense sign must be -1, 0 or 1, got {expense_sign}")
        signs[DocumentKind.EXPENSE] = expense_sign
    return signs


def effect(kind: DocumentKind, status: DocumentStatus, amount: Decimal,
           signs: Mapping[DocumentKind, int] = KIND_SIGNS) -> Decimal:
    """Signed contribution of a document to its party's balance."""
    if status != DocumentStatus.ACTIVE:
        return Decimal("0")
    return Decimal(signs[DocumentKind(kind)]) * Decimal(amount)
