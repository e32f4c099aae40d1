from fastapi import APIRouter, Body, Depends, Request
import logging
from app.api.deps import get_pay_fees_store
from app.core.pay_fees import PayFeesStore
from app.schemas.payment import PaymentOptionsResponse, SelectPaymentMethodRequest

router = APIRouter()
logger = logging.getLogger(__name__)

def payment_snapshot(store: PayFeesStore) -> PaymentOptionsResponse:
    return PaymentOptionsResponse(
        state=store.payment_state,
        user_payment_account=store.user_payment_account,
        user_selected_payment_method=store.user_selected_payment_method,
        allowed_payment_methods=store.allowed_payment_methods,
        allow_alternate_payment_method=store.allow_alternate_payment_method
    )

@router.get("/payment", response_model=PaymentOptionsResponse)
async def get_payment_options(store: PayFeesStore = Depends(get_pay_fees_store)):
    return payment_snapshot(store)

@router.post("/payment/init", response_model=PaymentOptionsResponse)
async def init_payment_method(request: Request, store: PayFeesStore = Depends(get_pay_fees_store)):
    """
    Fetch the account's payment configuration and derive the selectable methods.
    A failed lookup leaves the reset state and raises a PAYMENT_METHOD alert.
    """
    await store.init_payment_method(getattr(request.state, "token", None))
    return payment_snapshot(store)

@router.put("/payment/method", response_model=PaymentOptionsResponse)
async def select_payment_method(
    selection: SelectPaymentMethodRequest = Body(...),
    store: PayFeesStore = Depends(get_pay_fees_store)
):
    store.user_selected_payment_method = selection.payment_method
    if store.user_selected_payment_method != selection.payment_method:
        logger.info(f"Selection {selection.payment_method.value} overridden for account {store.account_id}")
    return payment_snapshot(store)

@router.post("/payment/reset", response_model=PaymentOptionsResponse)
async def reset_payment_options(store: PayFeesStore = Depends(get_pay_fees_store)):
    store.reset_payment_options()
    return payment_snapshot(store)
