class LedgerError(Exception):
    """Base class for ledger and document errors."""


class ValidationError(LedgerError):
    """Bad tenant key, amount or status transition. Raised before any write."""


class PartyNotFound(LedgerError):
    def __init__(self, tenant_id: str, party_id: str):
        self.tenant_id = tenant_id
        self.party_id = party_id
        super().__init__(f"Party {party_id} not found for tenant {tenant_id}")


class DocumentNotFound(LedgerError):
    def __init__(self, tenant_id: str, document_id: str):
        self.tenant_id = tenant_id
        self.document_id = document_id
        super().__init__(f"Document {document_id} not found for tenant {tenant_id}")


class PartyInUse(LedgerError):
    """Party still referenced by documents and cannot be deleted."""

    def __init__(self, party_id: str, references: int):
        self.party_id = party_id
        self.references = references
        super().__init__(f"Party {party_id} is referenced by {references} document(s)")


class MirrorWriteError(LedgerError):
    """The sales summary row could not be written. Never propagated to callers."""


class ConcurrentUpdateLoss(LedgerError):
    """The document kept changing underneath an update. Safe to retry."""

    def __init__(self, document_id: str, attempts: int):
        self.document_id = document_id
        self.attempts = attempts
        super().__init__(f"Document {document_id} changed concurrently; gave up after {attempts} attempts")
