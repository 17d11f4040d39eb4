from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool
from pydantic import ValidationError

from ..rules.ruleset import ReceiptParseError
from ..schemas import PointsResponse, Receipt, SubmitResponse
from ..services.rules.engine import compute_points
from ..store import ReceiptStore
from ..utils.logging import logger


router = APIRouter(prefix="/receipts", tags=["receipts"])

def get_store(request: Request) -> ReceiptStore:
    return request.app.state.store

@router.post("/process", response_model=SubmitResponse)
async def process_receipt(request: Request, store: ReceiptStore = Depends(get_store)):
    raw = await request.body()
    try:
        receipt = Receipt.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("decoding receipt failed: %s", e.errors(include_url=False))
        return PlainTextResponse("invalid receipt", status_code=400)

    receipt_id = await run_in_threadpool(store.submit, receipt)
    logger.info("Stored receipt %s (%d items)", receipt_id, len(receipt.items))
    return SubmitResponse(id=str(receipt_id))

@router.get("/{receipt_id}/points", response_model=PointsResponse)
def receipt_points(receipt_id: str, store: ReceiptStore = Depends(get_store)):
    stored = store.find_by_id(receipt_id)
    if stored is None:
        logger.warning("Receipt %s not found", receipt_id)
        return PlainTextResponse("Id not found", status_code=404)

    try:
        points = compute_points(stored)
    except ReceiptParseError:
        logger.exception("calculating points for receipt %s failed", receipt_id)
        return PlainTextResponse("receipt could not be scored", status_code=422)
    return PointsResponse(points=points)
