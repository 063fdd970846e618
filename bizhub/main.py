from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
import logging

from bizhub.config import settings
from bizhub.database import db
from bizhub.api import documents, parties, sales

# Setup Logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Business Hub Ledger API",
    description="Party balances and sales mirroring for the business hub",
    version="1.0.0"
)

# CORS Config
origins = [
    "http://localhost:3000",
    "http://localhost:8000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup():
    db.connect()

@app.on_event("shutdown")
async def shutdown():
    db.close()

# Router Registration
app.include_router(parties.router)
app.include_router(documents.router)
app.include_router(sales.router)

# Health Check
@app.get("/health")
async def health_check():
    return {"status": "ok", "environment": settings.ENVIRONMENT}

if __name__ == "__main__":
    uvicorn.run("bizhub.main:app", host="0.0.0.0", port=8000, reload=True)
