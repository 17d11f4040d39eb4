from fastapi import Depends, FastAPI
import uvicorn

from .config import settings
from .routes.receipts import get_store, router as receipts_router
from .schemas import HealthResponse
from .store import ReceiptStore
from .utils.logging import logger

app = FastAPI(title="Receipt Processor",
              description="Stores receipts in memory and scores their reward points",
    version="0.1.0",
    docs_url="/docs",          # Swagger UI
    redoc_url="/redoc",        # ReDoc
    openapi_url="/openapi.json")

app.state.store = ReceiptStore()

app.include_router(receipts_router)

@app.get("/health", response_model=HealthResponse)
def health(store: ReceiptStore = Depends(get_store)):
    return HealthResponse(ok=True, receipts=len(store))

def run() -> None:
    logger.info("Starting server on %s:%d (env=%s)", settings.HOST, settings.PORT, settings.ENV)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
