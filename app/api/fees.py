from fastapi import APIRouter, Body, Depends, HTTPException, Query
from typing import Optional
import logging
from app.api.deps import get_pay_fees_store
from app.core.pay_fees import PayFeesStore
from app.schemas.fees import FeeData, FeeInfo, FeesResponse, LoadFeesRequest

router = APIRouter()
logger = logging.getLogger(__name__)

def fees_snapshot(store: PayFeesStore) -> FeesResponse:
    return FeesResponse(
        fees=store.fees,
        folio_number=store.folio_number,
        fee_info=store.fee_info,
        total=store.total_fees
    )

@router.get("/fees", response_model=FeesResponse)
async def get_fees(store: PayFeesStore = Depends(get_pay_fees_store)):
    return fees_snapshot(store)

@router.post("/fees", response_model=FeesResponse)
async def add_fee(fee: FeeInfo = Body(...), store: PayFeesStore = Depends(get_pay_fees_store)):
    """
    Add a fee line item, or bump its quantity if it is already in the ledger.
    An incomplete fee is ignored; the unchanged ledger is returned.
    """
    store.add_fee(fee)
    return fees_snapshot(store)

@router.post("/fees/remove", response_model=FeesResponse)
async def remove_fee(fee: FeeInfo = Body(...), store: PayFeesStore = Depends(get_pay_fees_store)):
    store.remove_fee(fee)
    return fees_snapshot(store)

@router.post("/fees/load", response_model=FeesResponse)
async def load_fees(request: LoadFeesRequest = Body(...), store: PayFeesStore = Depends(get_pay_fees_store)):
    await store.load_fee_types_and_charges(request.folio_number, request.filing_data)
    logger.info(f"Fee info loaded for account {store.account_id}: {len(store.fee_info)} cached")
    return fees_snapshot(store)

@router.post("/fees/info", response_model=Optional[FeeInfo])
async def get_fee_info(
    filing_data: FeeData = Body(...),
    load: bool = Query(True),
    store: PayFeesStore = Depends(get_pay_fees_store)
):
    fee_info = await store.get_fee_info(filing_data, load)
    if fee_info is None:
        raise HTTPException(status_code=404, detail="Fee info not found.")
    return fee_info

@router.post("/fees/codes/{fee_code}", response_model=FeesResponse)
async def add_pay_fees(fee_code: str, store: PayFeesStore = Depends(get_pay_fees_store)):
    # Lookup failures surface as a FEE_INFO alert, not as an error response
    await store.add_pay_fees(fee_code)
    return fees_snapshot(store)

@router.post("/fees/reset", response_model=FeesResponse)
async def reset_fees(store: PayFeesStore = Depends(get_pay_fees_store)):
    store.reset()
    return fees_snapshot(store)
