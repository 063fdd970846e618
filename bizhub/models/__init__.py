from bizhub.models.base import MongoModel
from bizhub.models.party import Party, PartyType
from bizhub.models.document import FinancialDocument, DocumentItem, DocumentKind, DocumentStatus, DOCUMENT_ID_PREFIXES
from bizhub.models.sale import Sale, SaleItem, SalesTransactionSummary
