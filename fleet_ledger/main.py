import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fleet_ledger.api.api import api_router
from fleet_ledger.core.config import settings
from fleet_ledger.db.init_db import init_db
from fleet_ledger.services.financials import InvalidFinancialInput

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Fleet Ledger API: vehicles bought for resale, their costs and profitability",
    version="0.1.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
)

# Set CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)

@app.exception_handler(InvalidFinancialInput)
async def invalid_financial_input_handler(request: Request, exc: InvalidFinancialInput):
    """Stored rows that cannot be totaled are a server-side defect, not a client error."""
    logger.error(f"Financial aggregation failed on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Financial data is inconsistent"},
    )

@app.get("/")
async def root():
    """Root endpoint with basic service information."""
    return {
        "message": "Welcome to Fleet Ledger API",
        "version": "0.1.0",
        "docs_url": "/docs",
    }

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("Starting fleet ledger service...")
    if settings.CREATE_TABLES_ON_STARTUP:
        init_db()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fleet_ledger.main:app", host="0.0.0.0", port=8000, reload=True)
