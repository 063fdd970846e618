import logging
from motor.motor_asyncio import AsyncIOMotorClient
from bizhub.config import settings
from bizhub.repositories.party import PartyRepository
from bizhub.repositories.document import DocumentRepository
from bizhub.repositories.sale import SaleRepository, TransactionRepository
from bizhub.models.party import Party
from bizhub.models.document import FinancialDocument
from bizhub.models.sale import Sale, SalesTransactionSummary

logger = logging.getLogger(__name__)

class Database:
    client: AsyncIOMotorClient = None

    # Repositories
    parties: PartyRepository = None
    documents: DocumentRepository = None
    sales: SaleRepository = None
    transactions: TransactionRepository = None

    def connect(self):
        """Initialize database connection and repositories."""
        self.client = AsyncIOMotorClient(settings.MONGODB_URL)
        db = self.client[settings.DB_NAME]

        self.parties = PartyRepository(db.parties, Party)
        self.documents = DocumentRepository(db.documents, FinancialDocument)
        self.sales = SaleRepository(db.sales, Sale)
        self.transactions = TransactionRepository(db.transactions, SalesTransactionSummary)

        logger.info(f"Connected to MongoDB database {settings.DB_NAME}")

    def close(self):
        """Close database connection."""
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB")

db = Database()

async def get_db() -> Database:
    """Dependency for FastAPI."""
    return db
